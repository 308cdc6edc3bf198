# setup_instructions.py: how to provide credentials to the seeding scripts
import sys

from seed_config import SERVICE_ACCOUNT_ENV

INSTRUCTIONS = f"""\
🔧 To use the seeding scripts, you have two options:

Option 1 - Service account key file (Recommended):
1. Go to Firebase Console → Project Settings → Service Accounts
2. Click "Generate new private key"
3. Save it as service-account-key.json in the directory you run the scripts from
   (or point FIREBASE_CREDENTIALS_PATH at it)
4. Run: upload-quiz-questions

Option 2 - Environment Variable:
1. Set environment variable:
   Windows: $env:{SERVICE_ACCOUNT_ENV} = Get-Content service-account-key.json -Raw
   Linux/Mac: export {SERVICE_ACCOUNT_ENV}="$(cat service-account-key.json)"
2. Then run the main script

Client-style scripts (upload-quiz-web-sdk, upload-asl-quiz) can also sign in
anonymously: set FIREBASE_API_KEY and enable the Anonymous sign-in method.

❌ This script cannot run directly. Please use one of the options above."""


def main():
    print(INSTRUCTIONS)
    sys.exit(1)


if __name__ == "__main__":
    main()
