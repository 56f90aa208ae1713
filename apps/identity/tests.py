import json
from datetime import datetime, timedelta, timezone
from unittest import mock
from uuid import uuid4

import jwt
from django.core import mail
from django.test import TestCase, SimpleTestCase, Client

from apps.core.app_config import get_config
from apps.tasks.models import Task
from .models import User, SessionToken
from .jwt_auth import create_access_token, decode_token, get_user_id_from_token, get_bearer_token
from .services import issue_token, get_user_for_token
from .validators import validate_password, validate_email_address, validate_registration


class JWTTest(SimpleTestCase):
    def test_round_trip_user_id(self):
        user_id = uuid4()
        token = create_access_token(user_id)
        self.assertEqual(get_user_id_from_token(token), user_id)

    def test_tokens_are_unique(self):
        user_id = uuid4()
        self.assertNotEqual(create_access_token(user_id), create_access_token(user_id))

    def test_expired_token_rejected(self):
        config = get_config()
        token = jwt.encode(
            {
                'sub': str(uuid4()),
                'type': 'access',
                'exp': datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            config.jwt_secret,
            algorithm=config.jwt_algorithm,
        )
        self.assertIsNone(decode_token(token))

    def test_wrong_secret_rejected(self):
        token = jwt.encode({'sub': str(uuid4()), 'type': 'access'}, 'other-secret', algorithm='HS256')
        self.assertIsNone(get_user_id_from_token(token))

    def test_bearer_header_parsing(self):
        self.assertEqual(get_bearer_token("Bearer abc"), "abc")
        self.assertEqual(get_bearer_token("bearer  abc "), "abc")
        self.assertIsNone(get_bearer_token("Basic abc"))
        self.assertIsNone(get_bearer_token("Bearer"))
        self.assertIsNone(get_bearer_token(None))


class SignupValidationTest(SimpleTestCase):
    def test_password_rules(self):
        self.assertFalse(validate_password("short").valid)
        self.assertFalse(validate_password("MyPassword99").valid)
        self.assertTrue(validate_password("bousni123!").valid)
        self.assertFalse(validate_password("  abc   ").valid)

    def test_password_is_kept_as_typed(self):
        result = validate_password("  secret123 ")
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data["password"], "  secret123 ")

    def test_email_is_normalized(self):
        result = validate_email_address("  Ana@Example.COM ")
        self.assertTrue(result.valid)
        self.assertEqual(result.cleaned_data["email"], "ana@example.com")
        self.assertFalse(validate_email_address("not-an-email").valid)

    def test_collects_all_errors(self):
        result = validate_registration("", "bad", "123")
        self.assertFalse(result.valid)
        self.assertEqual(set(result.errors), {"name", "email", "password"})


class SessionTokenTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="ana@example.com", password="secret123", name="Ana")

    def test_token_resolves_to_user(self):
        token = issue_token(self.user)
        self.assertEqual(get_user_for_token(token), self.user)

    def test_revoked_token_does_not_resolve(self):
        token = issue_token(self.user)
        SessionToken.objects.filter(token=token).delete()
        self.assertIsNone(get_user_for_token(token))

    def test_inactive_user_does_not_resolve(self):
        token = issue_token(self.user)
        self.user.is_active = False
        self.user.save()
        self.assertIsNone(get_user_for_token(token))

    def test_each_login_is_its_own_session(self):
        first = issue_token(self.user)
        second = issue_token(self.user)
        self.assertNotEqual(first, second)
        self.assertEqual(self.user.session_tokens.count(), 2)


class IdentityAPITest(TestCase):
    def setUp(self):
        self.client = Client()

    def post_json(self, path, payload=None, **extra):
        return self.client.post(
            path,
            data=json.dumps(payload or {}),
            content_type='application/json',
            **extra,
        )

    def register(self, email="ana@example.com", name="Ana", password="secret123"):
        return self.post_json('/users', {"name": name, "email": email, "password": password})

    def test_signup_creates_user_and_sends_welcome_email(self):
        response = self.register()
        self.assertEqual(response.status_code, 201)

        data = response.json()
        self.assertEqual(data['user']['email'], 'ana@example.com')
        self.assertTrue(data['token'])
        self.assertTrue(User.objects.filter(email='ana@example.com').exists())

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ['ana@example.com'])
        self.assertEqual(mail.outbox[0].subject, 'Thanks for joining in!')
        self.assertIn('Welcome to the app, Ana.', mail.outbox[0].body)

    def test_signup_with_invalid_fields(self):
        response = self.register(email="nope", password="password1")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(len(mail.outbox), 0)

    def test_signup_with_missing_field(self):
        response = self.post_json('/users', {"email": "ana@example.com"})
        self.assertEqual(response.status_code, 400)

    def test_signup_duplicate_email(self):
        self.register()
        response = self.register(email="ANA@example.com")
        self.assertEqual(response.status_code, 400)

    def test_login_and_me(self):
        self.register()
        response = self.post_json('/users/login', {"email": "ana@example.com", "password": "secret123"})
        self.assertEqual(response.status_code, 200)
        token = response.json()['token']

        me = self.client.get('/users/me', HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()['name'], 'Ana')

    def test_login_with_surrounding_spaces_in_password(self):
        self.assertEqual(self.register(password="  secret123 ").status_code, 201)

        response = self.post_json('/users/login', {"email": "ana@example.com", "password": "  secret123 "})
        self.assertEqual(response.status_code, 200)
        response = self.post_json('/users/login', {"email": "ana@example.com", "password": "secret123"})
        self.assertEqual(response.status_code, 400)

    def test_signup_race_on_email_is_reported_as_duplicate(self):
        User.objects.create_user(email="ana@example.com", password="secret123", name="Ana")
        taken_check = mock.Mock()
        taken_check.exists.return_value = False

        # the existence check misses the row, so the unique constraint has to catch it
        with mock.patch.object(User.objects, "filter", return_value=taken_check):
            response = self.register()

        self.assertEqual(response.status_code, 400)
        self.assertIn("Email is already registered", response.json()["detail"])
        self.assertEqual(User.objects.filter(email="ana@example.com").count(), 1)
        self.assertEqual(len(mail.outbox), 0)

    def test_login_with_bad_password(self):
        self.register()
        response = self.post_json('/users/login', {"email": "ana@example.com", "password": "wrong-one"})
        self.assertEqual(response.status_code, 400)

    def test_me_requires_auth(self):
        self.assertEqual(self.client.get('/users/me').status_code, 401)
        response = self.client.get('/users/me', HTTP_AUTHORIZATION='Bearer garbage')
        self.assertEqual(response.status_code, 401)

    def test_logout_revokes_only_current_token(self):
        first = self.register().json()['token']
        second = self.post_json(
            '/users/login', {"email": "ana@example.com", "password": "secret123"}
        ).json()['token']

        response = self.post_json('/users/logout', HTTP_AUTHORIZATION=f'Bearer {first}')
        self.assertEqual(response.status_code, 200)

        self.assertEqual(self.client.get('/users/me', HTTP_AUTHORIZATION=f'Bearer {first}').status_code, 401)
        self.assertEqual(self.client.get('/users/me', HTTP_AUTHORIZATION=f'Bearer {second}').status_code, 200)

    def test_logout_all_revokes_every_token(self):
        first = self.register().json()['token']
        second = self.post_json(
            '/users/login', {"email": "ana@example.com", "password": "secret123"}
        ).json()['token']

        response = self.post_json('/users/logoutAll', HTTP_AUTHORIZATION=f'Bearer {second}')
        self.assertEqual(response.status_code, 200)
        for token in (first, second):
            self.assertEqual(self.client.get('/users/me', HTTP_AUTHORIZATION=f'Bearer {token}').status_code, 401)

    def test_delete_account_removes_tasks_and_sends_email(self):
        token = self.register().json()['token']
        user = User.objects.get(email='ana@example.com')
        other = User.objects.create_user(email="bob@example.com", password="secret123", name="Bob")
        Task.objects.create(owner_id=user.id, description="Mine")
        Task.objects.create(owner_id=other.id, description="Bob's")
        mail.outbox = []

        response = self.client.delete('/users/me', HTTP_AUTHORIZATION=f'Bearer {token}')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['email'], 'ana@example.com')

        self.assertFalse(User.objects.filter(id=user.id).exists())
        self.assertFalse(Task.objects.filter(owner_id=user.id).exists())
        self.assertFalse(SessionToken.objects.filter(user_id=user.id).exists())
        self.assertTrue(Task.objects.filter(owner_id=other.id).exists())

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].subject, 'Sorry to see you go!')
        self.assertIn('Goodbye, Ana.', mail.outbox[0].body)

        self.assertEqual(self.client.get('/users/me', HTTP_AUTHORIZATION=f'Bearer {token}').status_code, 401)
