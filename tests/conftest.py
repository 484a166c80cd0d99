import os

# Settings are read at import time, so these must be set before skillpath is imported
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("ENVIRONMENT", "test")
