"""
Tests for configuration classes and the production start-up checks.
"""
import os

import pytest

from jobsearch_crm import create_app
from jobsearch_crm.config import INSTANCE_DIR, SQLITE_URL, ProductionConfig, database_url


@pytest.fixture
def production(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    monkeypatch.setattr(ProductionConfig, 'SQLALCHEMY_DATABASE_URI', SQLITE_URL)
    monkeypatch.setattr(ProductionConfig, 'SECRET_KEY', 'prod-secret')
    monkeypatch.setattr(ProductionConfig, 'JWT_SECRET', None)
    return monkeypatch


class TestDatabaseUrl:

    def test_default_sqlite_file_is_absolute(self, monkeypatch):
        monkeypatch.delenv('DATABASE_URL', raising=False)
        path = database_url(SQLITE_URL)[len('sqlite:///'):]
        assert os.path.isabs(path)
        assert os.path.dirname(path) == INSTANCE_DIR

    def test_postgres_scheme_rewritten(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'postgres://u:p@db/crm')
        assert database_url(SQLITE_URL) == 'postgresql://u:p@db/crm'


class TestProductionApp:

    def test_sqlite_directory_exists(self, production):
        app = create_app('production')
        uri = app.config['SQLALCHEMY_DATABASE_URI']
        assert uri == SQLITE_URL
        assert os.path.isdir(os.path.dirname(uri[len('sqlite:///'):]))

    def test_jwt_secret_falls_back_to_secret_key(self, production):
        app = create_app('production')
        assert app.config['JWT_SECRET'] == 'prod-secret'

    def test_refuses_to_start_without_signing_key(self, production):
        production.setattr(ProductionConfig, 'SECRET_KEY', None)
        with pytest.raises(RuntimeError):
            create_app('production')
