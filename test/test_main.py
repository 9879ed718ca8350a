import inspect
from types import SimpleNamespace

import pytest

import main

from fakes import FIXED_NOW


def created_event(notification_id, data):
    snapshot = SimpleNamespace(id=notification_id, to_dict=lambda: data) if data is not None else None
    return SimpleNamespace(params={'notificationId': notification_id}, data=snapshot)


class BrokenSweeper:
    def sweep(self, now=None):
        raise RuntimeError("Firestore unavailable")


class BrokenDispatcher:
    def dispatch(self, notification_id, data):
        raise RuntimeError("Firestore unavailable")


@pytest.fixture
def patched_services(monkeypatch, services):
    monkeypatch.setattr(main, 'get_services', lambda: services)
    return services


class TestSendPushNotification:
    def test_dispatches_created_document(self, db, patched_services):
        db.seed('users/u1', {'name': 'Juan', 'fcmToken': 'tok1'})
        data = {'userId': 'u1', 'title': 'Order ready'}
        db.seed('notifications/n1', data)

        inspect.unwrap(main.send_push_notification)(created_event('n1', data))

        assert db.get('notifications/n1')['fcmResponse'] == 'msg123'

    def test_event_without_data(self, db, patched_services):
        inspect.unwrap(main.send_push_notification)(created_event('n1', None))

        assert db.writes == []

    def test_dispatch_errors_do_not_escape(self, patched_services):
        patched_services.dispatcher = BrokenDispatcher()

        inspect.unwrap(main.send_push_notification)(created_event('n1', {'userId': 'u1'}))


class TestCleanupOldNotifications:
    def test_runs_sweep(self, db, patched_services):
        db.seed('notifications/old', {'userId': 'u1', 'createdAt': FIXED_NOW.replace(year=2020)})

        inspect.unwrap(main.cleanup_old_notifications)(SimpleNamespace(schedule_time=FIXED_NOW))

        assert db.get('notifications/old') is None

    def test_sweep_errors_do_not_escape(self, patched_services):
        patched_services.sweeper = BrokenSweeper()

        inspect.unwrap(main.cleanup_old_notifications)(SimpleNamespace(schedule_time=FIXED_NOW))


class TestCallables:
    def test_sync_badge_count(self, db, patched_services):
        db.seed('users/u1/notifications/a', {'read': False})
        req = SimpleNamespace(auth=SimpleNamespace(uid='u1', token={}), data=None)

        assert inspect.unwrap(main.sync_badge_count)(req) == {'unreadCount': 1}

    def test_create_user(self, patched_services, admin):
        data = {'email': 'ana@byteplus.test', 'password': 'secret123', 'name': 'Ana', 'role': 'student'}
        req = SimpleNamespace(auth=SimpleNamespace(uid=admin, token={}), data=data)

        assert inspect.unwrap(main.create_user)(req) == {'success': True, 'userId': 'new-user-1'}

    def test_delete_user(self, db, patched_services, admin):
        db.seed('users/u1', {'name': 'Target', 'role': 'student'})
        req = SimpleNamespace(auth=SimpleNamespace(uid=admin, token={}), data={'userId': 'u1'})

        assert inspect.unwrap(main.delete_user)(req) == {'success': True, 'userId': 'u1'}

