import pytest

from studyviewtoolbox.db.credentials import MissingKeysError
from studyviewtoolbox.db.credentials import get_credentials_from_environment
from studyviewtoolbox.db.credentials import retrieve_credentials_from_file
from studyviewtoolbox.db.database_connection import get_and_validate_database_config


def test_credentials_from_environment(monkeypatch):
    monkeypatch.setenv('STUDY_VIEW_DATABASE_HOST', 'db.example.org')
    monkeypatch.setenv('STUDY_VIEW_DATABASE_USER', 'reader')
    monkeypatch.setenv('STUDY_VIEW_DATABASE_PASSWORD', 'secret')
    monkeypatch.delenv('STUDY_VIEW_DATABASE_NAME', raising=False)
    credentials = get_credentials_from_environment()
    assert credentials.endpoint == 'db.example.org'
    assert credentials.database == 'cbioportal'
    assert credentials.user == 'reader'


def test_missing_environment_variables(monkeypatch):
    monkeypatch.delenv('STUDY_VIEW_DATABASE_HOST', raising=False)
    with pytest.raises(EnvironmentError):
        get_credentials_from_environment()


def test_credentials_from_file(tmp_path):
    config = tmp_path / 'database.config'
    config.write_text('[database-credentials]\nendpoint = localhost\nuser = reader\npassword = secret\ndatabase = portal\n')
    credentials = retrieve_credentials_from_file(str(config))
    assert (credentials.endpoint, credentials.database) == ('localhost', 'portal')


def test_incomplete_file(tmp_path):
    config = tmp_path / 'database.config'
    config.write_text('[database-credentials]\nendpoint = localhost\n')
    with pytest.raises(MissingKeysError) as exception_info:
        retrieve_credentials_from_file(str(config))
    assert exception_info.value.missing == {'user', 'password'}


def test_config_file_must_exist(tmp_path):
    assert get_and_validate_database_config(None) is None
    with pytest.raises(FileNotFoundError):
        get_and_validate_database_config(str(tmp_path / 'absent.config'))
