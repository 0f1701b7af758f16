"""Study view toolbox python package."""
from studyviewtoolbox.standalone_utilities.configuration_settings import get_version

submodule_names = ['apiserver', 'db', 'studyview']

__version__ = get_version()
