"""Structures and accessors for database credentials."""
from os import environ
import configparser

from attr import define

from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

HOST_VARIABLE = 'STUDY_VIEW_DATABASE_HOST'
USER_VARIABLE = 'STUDY_VIEW_DATABASE_USER'
PASSWORD_VARIABLE = 'STUDY_VIEW_DATABASE_PASSWORD'
DATABASE_NAME_VARIABLE = 'STUDY_VIEW_DATABASE_NAME'


@define
class DBCredentials:
    """Data structure for database credentials."""
    endpoint: str
    database: str
    user: str
    password: str


def default_database_name() -> str:
    return 'cbioportal'


def get_credentials_from_environment() -> DBCredentials:
    _handle_unavailability()
    return DBCredentials(
        environ[HOST_VARIABLE],
        environ.get(DATABASE_NAME_VARIABLE, default_database_name()),
        environ[USER_VARIABLE],
        environ[PASSWORD_VARIABLE],
    )


class MissingKeysError(ValueError):
    def __init__(self, missing: set[str]):
        self.missing = missing
        message = f'Database configuration file is missing keys: {sorted(missing)}'
        super().__init__(message)


def retrieve_credentials_from_file(database_config_file: str) -> DBCredentials:
    """Reads the [database-credentials] section, with keys endpoint, user, password, and optionally
    database.
    """
    parser = configparser.ConfigParser()
    credentials = {}
    parser.read(database_config_file)
    if 'database-credentials' in parser.sections():
        section = parser['database-credentials']
        for key in set(_get_credential_keys() + ['database']).intersection(section.keys()):
            credentials[key] = section[key]
    missing = set(_get_credential_keys()).difference(credentials.keys())
    if len(missing) > 0:
        raise MissingKeysError(missing)
    return DBCredentials(
        credentials['endpoint'],
        credentials.get('database', default_database_name()),
        credentials['user'],
        credentials['password'],
    )


def _handle_unavailability():
    variables = [HOST_VARIABLE, USER_VARIABLE, PASSWORD_VARIABLE]
    unfound = [v for v in variables if not v in environ]
    if len(unfound) > 0:
        raise EnvironmentError(f'Did not find in environment: {str(unfound)}')


def _get_credential_keys():
    return ['endpoint', 'user', 'password']
