from types import SimpleNamespace

import pytest
from firebase_admin import auth, messaging
from firebase_admin.exceptions import InvalidArgumentError, UnavailableError

from byteplus_functions.clients import FcmPushGateway, FirebaseIdentityProvider, IdentityError, PushDeliveryError
from byteplus_functions.clients.identity import EMAIL_ALREADY_EXISTS, INVALID_EMAIL, USER_NOT_FOUND, WEAK_PASSWORD
from byteplus_functions.clients.push_gateway import INVALID_REGISTRATION_TOKEN, REGISTRATION_TOKEN_NOT_REGISTERED


def raising(error):
    def _raise(*args, **kwargs):
        raise error
    return _raise


class TestFcmPushGateway:
    def test_returns_message_id(self, monkeypatch):
        monkeypatch.setattr(messaging, 'send', lambda message, app=None: 'projects/byteplus/messages/1')

        assert FcmPushGateway().send(messaging.Message(token='tok1')) == 'projects/byteplus/messages/1'

    @pytest.mark.parametrize('error, code, invalid', [
        (messaging.UnregisteredError("Requested entity was not found."), REGISTRATION_TOKEN_NOT_REGISTERED, True),
        (InvalidArgumentError("The registration token is not a valid FCM registration token"),
         INVALID_REGISTRATION_TOKEN, True),
        (UnavailableError("FCM service unavailable"), "unavailable", False),
        (InvalidArgumentError("Request contains an invalid argument: Message is too big"), "invalid-argument", False),
        (ValueError("Data message must not contain reserved keywords"), "invalid-argument", False),
    ])
    def test_maps_errors(self, monkeypatch, error, code, invalid):
        monkeypatch.setattr(messaging, 'send', raising(error))

        with pytest.raises(PushDeliveryError) as exc_info:
            FcmPushGateway().send(messaging.Message(token='tok1'))

        assert exc_info.value.code == code
        assert exc_info.value.is_invalid_token is invalid
        assert exc_info.value.message == str(error)


class TestFirebaseIdentityProvider:
    def test_create_user_returns_uid(self, monkeypatch):
        calls = []

        def create_user(**kwargs):
            calls.append(kwargs)
            return SimpleNamespace(uid='uid-1')

        monkeypatch.setattr(auth, 'create_user', create_user)

        uid = FirebaseIdentityProvider().create_user('ana@byteplus.test', 'secret123', 'Ana')

        assert uid == 'uid-1'
        assert calls[0]['email'] == 'ana@byteplus.test'
        assert calls[0]['display_name'] == 'Ana'

    @pytest.mark.parametrize('error, code', [
        (auth.EmailAlreadyExistsError("The user with the provided email already exists", None, None),
         EMAIL_ALREADY_EXISTS),
        (ValueError('Malformed email address string: "ana@"'), INVALID_EMAIL),
        (ValueError("Invalid password string. Password must be a string at least 6 characters long."),
         WEAK_PASSWORD),
        (InvalidArgumentError("WEAK_PASSWORD : Password should be at least 6 characters"), WEAK_PASSWORD),
    ])
    def test_create_user_maps_errors(self, monkeypatch, error, code):
        monkeypatch.setattr(auth, 'create_user', raising(error))

        with pytest.raises(IdentityError) as exc_info:
            FirebaseIdentityProvider().create_user('ana@', 'x', 'Ana')

        assert exc_info.value.code == code

    def test_delete_missing_user(self, monkeypatch):
        monkeypatch.setattr(auth, 'delete_user', raising(auth.UserNotFoundError("No user record found")))

        with pytest.raises(IdentityError) as exc_info:
            FirebaseIdentityProvider().delete_user('ghost')

        assert exc_info.value.code == USER_NOT_FOUND
