import os

# Default to in-memory stores and the stub courier for tests
os.environ.setdefault("DISPATCH_PROVIDER", "stub")
os.environ.pop("DATABASE_URL", None)
