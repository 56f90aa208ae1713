"""
Tests for AppConfig loading and validation.
"""
from unittest import mock

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase

from apps.core import app_config
from apps.core.app_config import AppConfig, DEV_SECRET_KEY, configure, get_config, load_config


class LoadConfigTest(SimpleTestCase):

    def test_defaults_from_empty_environment(self):
        config = load_config({})
        self.assertTrue(config.debug)
        self.assertEqual(config.secret_key, DEV_SECRET_KEY)
        self.assertEqual(config.jwt_secret, DEV_SECRET_KEY)
        self.assertEqual(config.allowed_hosts, ('*',))
        self.assertEqual(config.task_backend, 'local')
        self.assertEqual(config.jwt_expire_days, 7)
        self.assertEqual(config.log_level, 'INFO')

    def test_environment_overrides(self):
        config = load_config({
            'DJANGO_DEBUG': 'false',
            'DJANGO_SECRET_KEY': 'prod-secret',
            'DJANGO_ALLOWED_HOSTS': 'api.example.com, admin.example.com',
            'JWT_SECRET': 'jwt-secret',
            'JWT_EXPIRE_DAYS': '1',
            'EMAIL_FROM': 'tasks@example.com',
            'TASK_BACKEND': 'Lambda',
            'TASK_QUEUE_URL': 'https://sqs.example.com/queue',
            'LOG_LEVEL': 'debug',
        })
        self.assertFalse(config.debug)
        self.assertEqual(config.allowed_hosts, ('api.example.com', 'admin.example.com'))
        self.assertEqual(config.jwt_secret, 'jwt-secret')
        self.assertEqual(config.jwt_expire_days, 1)
        self.assertEqual(config.email_from, 'tasks@example.com')
        self.assertEqual(config.task_backend, 'lambda')
        self.assertEqual(config.log_level, 'DEBUG')

    def test_jwt_secret_falls_back_to_secret_key(self):
        config = load_config({'DJANGO_SECRET_KEY': 'shared'})
        self.assertEqual(config.jwt_secret, 'shared')

    def test_production_requires_secret_key(self):
        with self.assertRaises(ImproperlyConfigured):
            load_config({'DJANGO_DEBUG': 'false'})

    def test_invalid_values_are_rejected(self):
        for env in (
            {'JWT_EXPIRE_DAYS': 'seven'},
            {'JWT_EXPIRE_DAYS': '0'},
            {'TASK_BACKEND': 'rabbit'},
            {'TASK_BACKEND': 'lambda'},
            {'LOG_LEVEL': 'LOUD'},
            {'EMAIL_FROM': 'nobody'},
        ):
            with self.subTest(env=env):
                with self.assertRaises(ImproperlyConfigured):
                    load_config(env)


class AppConfigTest(SimpleTestCase):

    def test_email_backend_follows_sendgrid_key(self):
        self.assertEqual(
            AppConfig().email_backend, 'django.core.mail.backends.console.EmailBackend'
        )
        self.assertEqual(
            AppConfig(sendgrid_api_key='SG.key').email_backend,
            'django.core.mail.backends.smtp.EmailBackend',
        )

    def test_api_key_is_not_in_repr(self):
        self.assertNotIn('SG.key', repr(AppConfig(sendgrid_api_key='SG.key')))

    def test_with_overrides_validates(self):
        config = AppConfig().with_overrides(task_backend='celery')
        self.assertEqual(config.task_backend, 'celery')
        with self.assertRaises(ImproperlyConfigured):
            AppConfig().with_overrides(jwt_secret='')

    def test_configure_installs_instance(self):
        with mock.patch.object(app_config, '_config', None):
            installed = configure(AppConfig(jwt_expire_days=2))
            self.assertIs(get_config(), installed)
            self.assertEqual(get_config().jwt_expire_days, 2)

    def test_get_config_loads_once(self):
        with mock.patch.object(app_config, '_config', None):
            with mock.patch.object(app_config, 'load_config', return_value=AppConfig()) as loader:
                first = get_config()
                second = get_config()
            self.assertIs(first, second)
            loader.assert_called_once_with()
