"""
Context managers for access to the study database, from inside library functions.
"""
from os.path import exists
from os.path import abspath
from os.path import expanduser

from psycopg import connect
from psycopg import Connection as PsycopgConnection
from psycopg import Cursor as PsycopgCursor
from psycopg import Error as PsycopgError
from attr import define

from studyviewtoolbox.db.credentials import DBCredentials
from studyviewtoolbox.db.credentials import get_credentials_from_environment
from studyviewtoolbox.db.credentials import retrieve_credentials_from_file
from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


class ConnectionProvider:
    """Simple wrapper of a database connection."""
    connection: PsycopgConnection | None

    def __init__(self, connection: PsycopgConnection):
        self.connection = connection

    def get_connection(self) -> PsycopgConnection:
        if self.connection is None:
            raise RuntimeError('Database connection is not available.')
        return self.connection

    def is_connected(self) -> bool:
        return self.connection is not None and not self.connection.closed


class DBConnection(ConnectionProvider):
    """
    Provides a read-only psycopg Postgres database connection. Takes care of connecting and
    disconnecting.
    """

    def __init__(self, database_config_file: str | None = None):
        if database_config_file is not None:
            credentials = retrieve_credentials_from_file(database_config_file)
        else:
            credentials = get_credentials_from_environment()
        try:
            super().__init__(self.make_connection(credentials))
        except PsycopgError as exception:
            message = 'Failed to connect to database: %s, %s'
            logger.error(message, credentials.endpoint, credentials.database)
            raise exception

    @staticmethod
    def make_connection(credentials: DBCredentials) -> PsycopgConnection:
        connection = connect(
            dbname=credentials.database,
            host=credentials.endpoint,
            user=credentials.user,
            password=credentials.password,
        )
        connection.read_only = True
        return connection

    def __enter__(self):
        return self.get_connection()

    def wrap_up_connection(self):
        if self.is_connected():
            self.get_connection().close()

    def __exit__(self, exception_type, exception_value, traceback):
        self.wrap_up_connection()


class DBCursor(DBConnection):
    """Context manager for shortcutting right to provision of a cursor."""
    cursor: PsycopgCursor

    def get_cursor(self) -> PsycopgCursor:
        return self.cursor

    def set_cursor(self, cursor: PsycopgCursor) -> None:
        self.cursor = cursor

    def __enter__(self):
        self.set_cursor(self.get_connection().cursor())
        return self.get_cursor()

    def __exit__(self, exception_type, exception_value, traceback):
        if self.is_connected():
            self.get_cursor().close()
        self.wrap_up_connection()


def get_and_validate_database_config(database_config_file: str | None) -> str | None:
    if database_config_file is None:
        return None
    config_file = abspath(expanduser(database_config_file))
    if not exists(config_file):
        raise FileNotFoundError(f'Need to supply valid database config filename: {config_file}')
    return config_file


@define
class SimpleReadOnlyProvider:
    """State-holder for basic read-only one-time database data provider classes."""
    cursor: PsycopgCursor
