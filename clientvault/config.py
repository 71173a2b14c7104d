"""
Configuration constants for the ClientVault application.
"""

import os

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "ClientVault"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_DESCRIPTION = "Local encrypted client and order manager"  # Use: One-line description shown by the command line help. Type: str. Range: Any valid string.

# Security Settings
SECRET_KEY_DEFAULT = "your-secure-secret-key-that-is-very-long"  # Use: Application-embedded secret the storage codec derives its key from. Obfuscates data at rest against casual inspection only. Type: str. Range: Any non-empty string.
SECRET_KEY_ENV_VAR = "CLIENTVAULT_SECRET_KEY"  # Use: Environment variable that overrides SECRET_KEY_DEFAULT. Type: str. Range: Any valid environment variable name.
CODEC_KEY_SALT = b"ClientVault_Codec_Salt"  # Use: Fixed salt for deriving the codec key from the embedded secret. Type: bytes. Range: At least 8 bytes (Argon2 minimum).
KEY_SIZE = 32  # Use: Size of the encryption key in bytes. Corresponds to AES-256. Type: int. Range: 16 (AES-128), 24 (AES-192), or 32 (AES-256) bytes.
NONCE_SIZE = 12  # Use: Size of the Nonce (Number used once) in bytes for AES-GCM. Type: int. Range: 12 bytes (96 bits) is the recommended size for GCM.
TAG_SIZE = 16  # Use: Size of the authentication tag in bytes for AES-GCM. Type: int. Range: 16 bytes (128 bits) is the recommended size for GCM.
ARGON2_TIME_COST = 2  # Use: Argon2id time cost parameter. Controls the number of iterations. Type: int. Range: Typically 1 to 10. Higher values increase security but also computation time.
ARGON2_MEMORY_COST = 65536  # Use: Argon2id memory cost parameter. Controls the memory usage in KiB. Type: int. Range: Recommended to be at least 65536 (64 MB). Higher values increase security but also memory usage.
ARGON2_PARALLELISM = 4  # Use: Argon2id parallelism parameter. Controls the number of threads/lanes. Type: int. Range: Typically 1 to 8, often set to the number of CPU cores.
CODEC_MAGIC = b"CVLT"  # Use: Magic bytes prefixed to every encoded bucket value. Type: bytes. Range: Exactly 4 bytes.
CODEC_VERSION = 1  # Use: Version of the encoded bucket frame. Type: int. Range: 0 to 255.

# Storage Settings
BUCKET_USER = "user"  # Use: Bucket holding the single registered User. Type: str. Range: Any unique bucket name.
BUCKET_CLIENTS = "clients"  # Use: Bucket holding the Client collection. Type: str. Range: Any unique bucket name.
BUCKET_ORDERS = "orders"  # Use: Bucket holding the Order collection. Type: str. Range: Any unique bucket name.
BUCKET_CUSTOM_FIELDS = "customFields"  # Use: Bucket holding the CustomField collection. Type: str. Range: Any unique bucket name.
RESERVED_BUCKETS = (BUCKET_USER, BUCKET_CLIENTS, BUCKET_ORDERS, BUCKET_CUSTOM_FIELDS)  # Use: All bucket names used by the application. Type: tuple[str]. Range: Derived value.
DATA_BUCKETS = (BUCKET_CLIENTS, BUCKET_ORDERS, BUCKET_CUSTOM_FIELDS)  # Use: Buckets covered by export, import and reset. The user bucket is never touched by them. Type: tuple[str]. Range: Derived value.
STORE_PATH_ENV_VAR = "CLIENTVAULT_STORE"  # Use: Environment variable that overrides the default store file path. Type: str. Range: Any valid environment variable name.

# Record Settings
ORDER_STATUSES = ("pending", "processing", "completed", "cancelled", "delivered")  # Use: Allowed Order.status values. Type: tuple[str]. Range: Fixed set.
OPEN_ORDER_STATUSES = ("pending", "processing")  # Use: Statuses counted as pending on the dashboard. Type: tuple[str]. Range: Subset of ORDER_STATUSES.
COMPLETED_ORDER_STATUS = "completed"  # Use: Status counted as completed on the dashboard. Type: str. Range: Member of ORDER_STATUSES.
DEFAULT_ORDER_STATUS = "pending"  # Use: Status given to orders created without one. Type: str. Range: Member of ORDER_STATUSES.
FIELD_TYPES = ("text", "number", "date", "email", "phone", "select", "checkbox")  # Use: Allowed CustomField.type values. Type: tuple[str]. Range: Fixed set.
ENTITY_TYPES = ("client", "order")  # Use: Record types a CustomField can attach to. Type: tuple[str]. Range: Fixed set.
ORDER_NUMBER_PREFIX = "ORD-"  # Use: Prefix of generated order numbers. Type: str. Range: Any string.
ORDER_NUMBER_DIGITS = 6  # Use: Number of trailing millisecond-timestamp digits in generated order numbers. Type: int. Range: 1 to 13.
UNKNOWN_CLIENT_NAME = "Unknown Client"  # Use: Display name for orders whose client no longer exists. Type: str. Range: Any string.

# Dashboard Settings
TOP_CLIENTS_LIMIT = 5  # Use: Number of clients listed in the dashboard's top clients. Type: int. Range: Positive integer.

# File and Directory Names
CONFIG_DIR_NAME = ".clientvault"  # Use: Name of the hidden directory within the user's home directory where ClientVault stores its data file. Type: str. Range: Any valid directory name.
DEFAULT_STORE_FILE = "store.json"  # Use: Default filename for the encrypted bucket store. Type: str. Range: Any valid filename.
CORRUPT_STORE_SUFFIX = ".corrupt"  # Use: Suffix of the copy kept of an unreadable store file before it is overwritten. Type: str. Range: Any filename suffix.
EXPORT_FILE_NAME = "client-vault-backup.json"  # Use: Default filename for plain JSON exports. Type: str. Range: Any valid filename.

# Logging
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"  # Use: Format string handed to logging.basicConfig by the entry point. Type: str. Range: Any logging format string.


def get_secret_key() -> str:
    """Return the codec secret, preferring the environment override."""
    return os.environ.get(SECRET_KEY_ENV_VAR) or SECRET_KEY_DEFAULT


def get_default_store_path() -> str:
    """Return the store file path, preferring the environment override."""
    override = os.environ.get(STORE_PATH_ENV_VAR)
    if override:
        return override
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, DEFAULT_STORE_FILE)
