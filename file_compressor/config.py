import os

# -----------------------------------------------------------
# PATH CONFIGURATION
# -----------------------------------------------------------
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")

COMPRESSED_EXTENSION = ".huff"


class Config:
    """Defaults for the web app; FILE_COMPRESSOR_* environment variables override them."""
    SECRET_KEY = "dev"  # change in production
    STORAGE_DIR = DATA_DIR
    MAX_CONTENT_LENGTH = 64 * 1024 * 1024
    # Caps what /decompress_file may expand a single upload into.
    MAX_DECOMPRESSED_SIZE = 256 * 1024 * 1024
    COMPRESSED_EXTENSION = COMPRESSED_EXTENSION
