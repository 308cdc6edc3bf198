import logging
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import firestore
from google.cloud import firestore as gc_firestore
from google.oauth2.credentials import Credentials as TokenCredentials

logger = logging.getLogger(__name__)


def initialize_firebase(credential, project_id: str) -> firebase_admin.App:
    """Initialize (or reuse) the default Firebase app with the given credential."""
    if not firebase_admin._apps:
        app = firebase_admin.initialize_app(credential, {"projectId": project_id})
        logger.debug("✅ Firebase initialized.")
        return app
    return firebase_admin.get_app()


class FirestoreBatch:
    """One pending write batch; every ``set`` creates a new auto-id document."""

    def __init__(self, client):
        self._client = client
        self._batch = client.batch()
        self.size = 0

    def set(self, collection_path: str, fields: Dict[str, Any]) -> None:
        ref = self._client.collection(collection_path).document()
        self._batch.set(ref, fields)
        self.size += 1

    def commit(self) -> None:
        self._batch.commit()


class FirestoreStore:
    """Admin SDK store: service account or application-default identity."""

    supports_batch = True

    def __init__(self, client, app: Optional[firebase_admin.App] = None):
        self._client = client
        self._app = app

    @classmethod
    def from_credential(cls, credential, project_id: str) -> "FirestoreStore":
        app = initialize_firebase(credential, project_id)
        try:
            client = firestore.client(app)
        except Exception:
            firebase_admin.delete_app(app)
            raise
        return cls(client, app)

    def create_document(self, collection_path: str, fields: Dict[str, Any]) -> str:
        ref = self._client.collection(collection_path).document()
        ref.set(fields)
        return ref.id

    def batch(self) -> FirestoreBatch:
        return FirestoreBatch(self._client)

    def server_timestamp(self):
        return firestore.SERVER_TIMESTAMP

    def sample_documents(self, collection_path: str, limit: int = 1) -> List[dict]:
        docs = self._client.collection(collection_path).limit(limit).stream()
        return [doc.to_dict() or {} for doc in docs]

    def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None
            logger.info("🧹 Firebase app released")


class AnonymousFirestoreStore(FirestoreStore):
    """Client-style store authorized by an anonymous Firebase Auth ID token.

    Writes are issued one document at a time; there is no batch commit.
    """

    supports_batch = False

    def __init__(self, client, user_id: str):
        super().__init__(client)
        self.user_id = user_id

    @classmethod
    def from_id_token(cls, id_token: str, user_id: str, project_id: str) -> "AnonymousFirestoreStore":
        client = gc_firestore.Client(project=project_id, credentials=TokenCredentials(id_token))
        return cls(client, user_id)

    def batch(self) -> FirestoreBatch:
        raise NotImplementedError("anonymous client store writes documents one at a time")

    def close(self) -> None:
        # Anonymous sessions live only in the client; signing out means dropping the token
        self._client.close()
        logger.info("👋 Signed out successfully")
