"""
App import and factory smoke tests
"""

import os

import pytest

# Set test environment
os.environ.update({
    'FLASK_ENV': 'testing',
    'TESTING': 'true',
    'DATABASE_URL': 'sqlite:///:memory:'
})


def test_app_factory():
    """Test that the application factory builds an app with every blueprint"""
    from app import create_app, db

    app = create_app({'TESTING': True})

    assert db is not None
    assert app.config['TESTING'] is True
    assert {'users', 'drivers', 'delivery_routes', 'reports'} <= set(app.blueprints)


def test_model_imports():
    """Test that models can be imported"""
    from models import User, Driver, Route

    assert User.__tablename__ == 'users'
    assert Driver.__tablename__ == 'drivers'
    assert Route.__tablename__ == 'routes'


def test_service_imports():
    """Test that service classes can be imported and instantiated"""
    from services import (
        UserService, DriverService, RouteService, ReportingService, TransactionHelper
    )

    for service_cls in (UserService, DriverService, RouteService, ReportingService, TransactionHelper):
        assert service_cls() is not None


@pytest.mark.parametrize('url, expected_uri, pooled', [
    ('postgres://u:p@db/fleet', 'postgresql+psycopg2://u:p@db/fleet', True),
    ('postgresql://u:p@db/fleet', 'postgresql+psycopg2://u:p@db/fleet', True),
    ('sqlite:///fleet_manager.db', 'sqlite:///fleet_manager.db', False),
    ('sqlite:///:memory:', 'sqlite:///:memory:', False),
])
def test_database_settings(url, expected_uri, pooled):
    from app import _database_settings

    uri, engine_options = _database_settings(url)

    assert uri == expected_uri
    assert ('pool_size' in engine_options) is pooled


def test_database_commands(tmp_path, monkeypatch, capsys):
    """Test the init, status and drop commands against a scratch SQLite file"""
    import database_commands

    monkeypatch.setenv('DATABASE_URL', f"sqlite:///{tmp_path / 'fleet.db'}")

    assert database_commands.main(['init']) == 0
    assert database_commands.main(['status']) == 0
    assert 'drivers: 0' in capsys.readouterr().out

    assert database_commands.main(['drop']) == 1
    assert database_commands.main(['drop', '--yes']) == 0
