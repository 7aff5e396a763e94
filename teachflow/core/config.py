import os

# Mongo
DB_NAME = os.getenv("DB_NAME", "teachflow")
MONGODB_URI = os.getenv("MONGODB_URI") or (
    "mongodb+srv://{user}:{password}@{host}/?retryWrites=true&w=majority".format(
        user=os.getenv("DB_USER", ""),
        password=os.getenv("DB_PASS", ""),
        host=os.getenv("DB_HOST", "localhost"),
    )
)
STORE_TIMEOUT_MS = int(os.getenv("STORE_TIMEOUT_MS", "5000"))

# Identity provider (Firebase ID tokens)
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID", "")
VERIFIER_TIMEOUT_SECONDS = float(os.getenv("VERIFIER_TIMEOUT_SECONDS", "10"))
CERT_CACHE_SECONDS = int(os.getenv("CERT_CACHE_SECONDS", "3600"))

# Payments
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "")
PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "usd")

# Read models
POPULAR_CLASSES_LIMIT = int(os.getenv("POPULAR_CLASSES_LIMIT", "6"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
