"""Firestore field and subcollection names shared by the handlers.

Top-level collection names are configurable (see ``Settings``); these
are fixed by the mobile client.
"""

SUBCOLLECTION_NOTIFICATIONS = "notifications"

FIELD_FCM_TOKEN = "fcmToken"
