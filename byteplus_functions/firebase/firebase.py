import json
import logging
from typing import Optional

import firebase_admin
import google.cloud.firestore
from firebase_admin import credentials, firestore

from ..config import settings

logger = logging.getLogger(__name__)


class FirebaseApp:
    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(FirebaseApp, cls).__new__(cls)
            cls._instance.initialized = False
        return cls._instance

    def __init__(self, firebase_secret: Optional[str] = None):
        if self.initialized:
            return
        logger.info("FirebaseApp.__init__() called")
        self.firebase_secret = firebase_secret if firebase_secret is not None else settings.firebase_secret
        self.app = None
        self.firestore_db = None
        self.connect()
        self.initialized = True

    def get_app(self) -> firebase_admin.App:
        return self.app

    def get_firestore_db(self) -> google.cloud.firestore.Client:
        return self.firestore_db

    def connect(self) -> None:
        try:
            # Try to get the existing default app
            self.app = firebase_admin.get_app()
            logger.info("Retrieved existing Firebase app")
        except ValueError:
            if self.firebase_secret:
                cert_dict = json.loads(self.firebase_secret)
                if isinstance(cert_dict, str):
                    cert_dict = json.loads(cert_dict)
                self.app = firebase_admin.initialize_app(credential=credentials.Certificate(cert_dict))
            else:
                # Cloud Functions provide application default credentials
                self.app = firebase_admin.initialize_app()
            logger.info(f"Initialized Firebase app: {self.app.name}")
        self.firestore_db = firestore.client(self.app)
