import setuptools
from os.path import join, dirname

def get_file_contents(filename):
    package_directory = dirname(__file__)
    with open(join(package_directory, filename), 'r', encoding='utf-8') as file:
        contents = file.read()
    return contents

long_description = """Aggregation queries behind a cancer genomics study view: clinical value
counts, histogram bins, density plots, altered gene counts with significance, and profiled sample
counts over a filtered cohort.
"""
version = get_file_contents(join('studyviewtoolbox', 'version.txt')).strip()

apiserver_requirements = [
    'fastapi>=0.110.0',
    'uvicorn>=0.27.0',
    'secure>=1.0.0',
]
test_requirements = [
    'pytest>=7.4.0',
    'httpx>=0.26.0',
]

setuptools.setup(
    name='studyviewtoolbox',
    version=version,
    description='Cohort aggregation queries for cancer genomics study views.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=[
        'studyviewtoolbox',
        'studyviewtoolbox.entry_point',
        'studyviewtoolbox.standalone_utilities',
        'studyviewtoolbox.apiserver',
        'studyviewtoolbox.apiserver.app',
        'studyviewtoolbox.apiserver.scripts',
        'studyviewtoolbox.db',
        'studyviewtoolbox.db.accessors',
        'studyviewtoolbox.db.exchange_data_formats',
        'studyviewtoolbox.db.scripts',
        'studyviewtoolbox.studyview',
    ],
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
        'Intended Audience :: Science/Research',
    ],
    package_data={
        'studyviewtoolbox': [
            'version.txt',
        ],
    },
    python_requires='>=3.10',
    entry_points={
        'console_scripts' : [
            'svt = studyviewtoolbox.entry_point.cli:main_program',
        ]
    },
    install_requires=[
        'psycopg[binary]>=3.1.0',
        'attrs>=23.1.0',
        'pydantic>=2.4.0',
        'pandas>=2.0.0',
        'numpy>=1.24.0',
    ],
    extras_require={
        'apiserver': apiserver_requirements,
        'test': apiserver_requirements + test_requirements,
        'all': apiserver_requirements + test_requirements,
    },
)
