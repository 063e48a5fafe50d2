import mongomock
import pytest

from shared.config import AppConfig
from market_app.app import create_app

from helpers import register


@pytest.fixture
def config(tmp_path):
    # low bcrypt cost keeps the suite fast; the default of 10 is asserted separately
    return AppConfig(
        jwt_secret="test-signing-key-for-the-suite-0123456789",
        upload_folder=str(tmp_path / "uploads"),
        log_level="WARNING",
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(config):
    app = create_app(config, mongo_client=mongomock.MongoClient())
    app.config['TESTING'] = True
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return app.extensions['market']


@pytest.fixture
def vendor(services):
    return register(services)


@pytest.fixture
def other_vendor(services):
    return register(services, email="other@example.com", name="Bo", shop_name="Bo's Corner")
