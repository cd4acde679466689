import os

import pytest

from app import create_app
from config import Config, TestConfig


class NoJwtSecretConfig(TestConfig):
    JWT_SECRET_KEY = None


def test_jwt_secret_comes_only_from_environment():
    assert Config.JWT_SECRET_KEY == os.environ.get('JWT_SECRET')


def test_create_app_refuses_to_start_without_jwt_secret():
    with pytest.raises(RuntimeError, match='JWT_SECRET'):
        create_app(NoJwtSecretConfig)
