# settings read from the environment once, at import time
import os

DATA_DIR = os.getenv("MARKETPLACE_DATA_DIR", "data")
DEBUG = bool(os.getenv("DEBUG"))
