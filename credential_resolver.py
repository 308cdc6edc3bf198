"""
credential_resolver.py

Chooses how a seeding run authenticates to Firestore. Strategies are tried in a
fixed order and the first one that yields a store wins:

    admin scripts:  key file -> FIREBASE_SERVICE_ACCOUNT_KEY -> application default
    client scripts: key file -> FIREBASE_SERVICE_ACCOUNT_KEY -> anonymous sign-in

A strategy returns ``None`` when it does not apply (no file, empty variable,
no ambient identity). Anonymous sign-in that the server refuses raises
``AuthenticationRejected`` and ends the run.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

import requests
from firebase_admin import credentials
from google.auth.exceptions import DefaultCredentialsError

from firebase_backend import AnonymousFirestoreStore, FirestoreStore
from seed_config import SeedConfig
from seed_errors import AuthenticationRejected, NoCredentialAvailable

logger = logging.getLogger(__name__)

ANONYMOUS_SIGNUP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signUp"


@dataclass
class StoreHandle:
    store: FirestoreStore
    strategy: str

    def release(self) -> None:
        """Best-effort cleanup; failures are logged, never raised."""
        try:
            self.store.close()
        except Exception as e:
            logger.warning(f"⚠️ Failed to release Firestore handle: {e}")


class CredentialStrategy:
    name = "base"

    def try_authenticate(self) -> Optional[StoreHandle]:
        raise NotImplementedError


class ServiceAccountFileStrategy(CredentialStrategy):
    name = "service-account-file"

    def __init__(self, path: str, project_id: str):
        self.path = path
        self.project_id = project_id

    def try_authenticate(self) -> Optional[StoreHandle]:
        if not os.path.exists(self.path):
            logger.debug(f"No service account key at {self.path}")
            return None
        logger.info("🔑 Using service account key file...")
        try:
            cred = credentials.Certificate(self.path)
        except (ValueError, OSError) as e:
            logger.warning(f"⚠️ Ignoring unreadable service account key {self.path}: {e}")
            return None
        return StoreHandle(FirestoreStore.from_credential(cred, self.project_id), self.name)


class EnvironmentBlobStrategy(CredentialStrategy):
    name = "environment-variable"

    def __init__(self, variable: str, project_id: str, environ: Optional[Mapping[str, str]] = None):
        self.variable = variable
        self.project_id = project_id
        self.environ = os.environ if environ is None else environ

    def try_authenticate(self) -> Optional[StoreHandle]:
        blob = self.environ.get(self.variable)
        if not blob:
            return None
        logger.info("🔑 Using environment variable for service account...")
        try:
            cred = credentials.Certificate(json.loads(blob))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"⚠️ Ignoring malformed {self.variable}: {e}")
            return None
        return StoreHandle(FirestoreStore.from_credential(cred, self.project_id), self.name)


class ApplicationDefaultStrategy(CredentialStrategy):
    name = "application-default"

    def __init__(self, project_id: str):
        self.project_id = project_id

    def try_authenticate(self) -> Optional[StoreHandle]:
        cred = credentials.ApplicationDefault()
        try:
            # Resolves lazily; forcing it here tells us whether an ambient identity exists
            cred.get_credential()
        except DefaultCredentialsError as e:
            logger.debug(f"Application default credentials unavailable: {e}")
            return None
        logger.info("🔑 Using application default credentials...")
        return StoreHandle(FirestoreStore.from_credential(cred, self.project_id), self.name)


class AnonymousSessionStrategy(CredentialStrategy):
    name = "anonymous"

    def __init__(self, api_key: Optional[str], project_id: str, session=None, timeout: float = 30):
        self.api_key = api_key
        self.project_id = project_id
        self.session = session or requests
        self.timeout = timeout

    def try_authenticate(self) -> Optional[StoreHandle]:
        if not self.api_key:
            logger.debug("FIREBASE_API_KEY not set; anonymous sign-in unavailable")
            return None
        logger.info("🔐 Attempting to sign in anonymously...")
        resp = self.session.post(
            ANONYMOUS_SIGNUP_URL,
            params={"key": self.api_key},
            json={"returnSecureToken": True},
            timeout=self.timeout,
        )
        if not resp.ok:
            raise AuthenticationRejected(f"Anonymous authentication failed: {_auth_error_message(resp)}")
        try:
            body = resp.json()
            id_token = body["idToken"]
        except (ValueError, KeyError, TypeError):
            raise AuthenticationRejected(
                f"Anonymous authentication failed: no idToken in sign-up response ({_auth_error_message(resp)})"
            )
        logger.info("✅ Signed in anonymously")
        store = AnonymousFirestoreStore.from_id_token(id_token, body.get("localId", ""), self.project_id)
        return StoreHandle(store, self.name)


def _auth_error_message(resp) -> str:
    try:
        return resp.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP {resp.status_code}"


def admin_strategies(config: SeedConfig) -> List[CredentialStrategy]:
    return [
        ServiceAccountFileStrategy(config.credentials_path, config.project_id),
        EnvironmentBlobStrategy(config.service_account_env, config.project_id),
        ApplicationDefaultStrategy(config.project_id),
    ]


def client_strategies(config: SeedConfig) -> List[CredentialStrategy]:
    return [
        ServiceAccountFileStrategy(config.credentials_path, config.project_id),
        EnvironmentBlobStrategy(config.service_account_env, config.project_id),
        AnonymousSessionStrategy(config.api_key, config.project_id),
    ]


def resolve_credentials(strategies: Iterable[CredentialStrategy]) -> StoreHandle:
    """Return the handle from the first strategy that succeeds.

    Raises:
        NoCredentialAvailable: no strategy applied.
        AuthenticationRejected: anonymous sign-in was refused by the server.
    """
    for strategy in strategies:
        handle = strategy.try_authenticate()
        if handle is not None:
            logger.info(f"✅ Authenticated via {handle.strategy}")
            return handle
    raise NoCredentialAvailable()
