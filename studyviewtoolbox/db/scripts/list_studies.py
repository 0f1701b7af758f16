"""Utility to report study identifiers in the database."""
import argparse

from studyviewtoolbox.db.database_connection import DBCursor
from studyviewtoolbox.db.database_connection import get_and_validate_database_config
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger('svt db list-studies')


def retrieve_study_identifiers(database_config_file: str | None) -> list[str]:
    with DBCursor(database_config_file=database_config_file) as cursor:
        cursor.execute('SELECT cancer_study_identifier FROM cancer_study ORDER BY cancer_study_identifier;')
        return [str(row[0]) for row in cursor.fetchall()]


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        prog='svt db list-studies',
        description='List the studies in the given database.'
    )
    parser.add_argument(
        '--database-config-file',
        dest='database_config_file',
        type=str,
        required=False,
        help='File with a [database-credentials] section. Defaults to STUDY_VIEW_DATABASE_* variables.',
    )
    args = parser.parse_args()

    config_file = get_and_validate_database_config(args.database_config_file)
    studies = retrieve_study_identifiers(config_file)
    logger.info('Found %s studies.', len(studies))
    for study in studies:
        print(study)
