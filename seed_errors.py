"""
seed_errors.py

Error taxonomy for the seeding scripts and the remediation text printed for each
kind of failure.
"""

from __future__ import annotations

import enum
from typing import Optional

import requests
from google.api_core import exceptions as gexc

CREDENTIALS_GUIDANCE = (
    "Firebase initialization failed. Please ensure you have:\n"
    "1. A service-account-key.json file in the directory you run the script from, OR\n"
    "2. FIREBASE_SERVICE_ACCOUNT_KEY environment variable set, OR\n"
    "3. Are running in a Google Cloud environment with default credentials\n"
    "   (client-style scripts: FIREBASE_API_KEY set for anonymous sign-in)\n\n"
    "To get the service account key:\n"
    "1. Go to Firebase Console → Project Settings → Service Accounts\n"
    "2. Click \"Generate new private key\"\n"
    "3. Download and rename to service-account-key.json\n"
    "   (or export FIREBASE_SERVICE_ACCOUNT_KEY=\"$(cat service-account-key.json)\")"
)

ANONYMOUS_AUTH_GUIDANCE = (
    "🔧 To fix this issue, you have two options:\n\n"
    "Option 1: Enable Anonymous Authentication\n"
    "1. Go to Firebase Console: https://console.firebase.google.com/\n"
    "2. Select your project\n"
    "3. Go to Authentication → Sign-in method\n"
    "4. Enable \"Anonymous\" sign-in method\n"
    "5. Run this script again\n\n"
    "Option 2: Use Service Account (Recommended for server operations)\n"
    "1. Go to Firebase Console → Project Settings → Service Accounts\n"
    "2. Click \"Generate new private key\"\n"
    "3. Download and save as service-account-key.json\n"
    "4. Run: upload-quiz-questions (uses Admin SDK)"
)

PERMISSION_GUIDANCE = (
    "💡 Firestore Security Rules Issue:\n"
    "Your Firestore security rules are preventing writes.\n"
    "You need to update your Firestore rules to allow authenticated users to write.\n\n"
    "Example Firestore Rules:\n"
    "rules_version = '2';\n"
    "service cloud.firestore {\n"
    "  match /databases/{database}/documents {\n"
    "    match /{document=**} {\n"
    "      allow read, write: if request.auth != null;\n"
    "    }\n"
    "  }\n"
    "}"
)

UNAVAILABLE_GUIDANCE = (
    "💡 Network Issue:\n"
    "Check your internet connection and Firebase project configuration, then run the script again."
)


class SeedError(Exception):
    """Base class for failures the seeding scripts report themselves."""

    guidance: Optional[str] = None


class NoCredentialAvailable(SeedError):
    guidance = CREDENTIALS_GUIDANCE

    def __init__(self, message: str = "No authentication method available"):
        super().__init__(message)


class AuthenticationRejected(SeedError):
    guidance = ANONYMOUS_AUTH_GUIDANCE


class UploadInterrupted(SeedError):
    """A store write failed after the quiz document was created (or while creating it)."""

    def __init__(self, quiz_id: Optional[str], written: int, total: int):
        self.quiz_id = quiz_id
        self.written = written
        self.total = total
        super().__init__(f"{written} of {total} records written")


class StoreErrorKind(enum.Enum):
    PERMISSION_DENIED = "permission-denied"
    UNAVAILABLE = "unavailable"
    OTHER = "other"


_PERMISSION_ERRORS = (gexc.PermissionDenied, gexc.Forbidden)
_UNAVAILABLE_ERRORS = (
    gexc.ServiceUnavailable,
    gexc.DeadlineExceeded,
    gexc.GatewayTimeout,
    requests.ConnectionError,
    requests.Timeout,
)

_GUIDANCE = {
    StoreErrorKind.PERMISSION_DENIED: PERMISSION_GUIDANCE,
    StoreErrorKind.UNAVAILABLE: UNAVAILABLE_GUIDANCE,
}


def classify_store_error(exc: BaseException) -> StoreErrorKind:
    if isinstance(exc, _PERMISSION_ERRORS):
        return StoreErrorKind.PERMISSION_DENIED
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        return StoreErrorKind.UNAVAILABLE
    return StoreErrorKind.OTHER


def guidance_for(kind: StoreErrorKind) -> Optional[str]:
    return _GUIDANCE.get(kind)
