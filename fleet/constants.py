"""
Fleet Constants

Centralized constants for file names, build-output conventions and defaults.
"""

# Workspace Configuration
CONFIG_FILE_NAME = "Fleet.yml"
CARGO_MANIFEST = "Cargo.toml"
ANCHOR_MANIFEST = "Anchor.toml"
DEFAULT_DEPLOYER_KEYPAIR = "~/.config/solana/id.json"
DEFAULT_ARTIFACTS_DIR = "artifacts"
DEFAULT_NETWORK = "devnet"
LOGS_DIR = ".fleet/logs"

# Built-in Networks (name -> RPC endpoint)
BUILTIN_NETWORKS = {
    "localnet": "http://127.0.0.1:8899",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
    "mainnet": "https://api.mainnet-beta.solana.com",
}

# Build Output Layout (relative to workspace root)
BUILD_DEPLOY_DIR = "target/deploy"
BUILD_IDL_DIR = "target/idl"
PROGRAMS_DIR = "programs"

# Archived Artifact File Names
ARTIFACT_BIN_NAME = "program.so"
ARTIFACT_ID_NAME = "program-keypair.json"
ARTIFACT_IDL_NAME = "idl.json"

# Credentials
UPGRADE_AUTHORITY_ENV = "UPGRADE_AUTHORITY_KEYPAIR"
KEYPAIR_FILE_PERMISSIONS = 0o600

# External Tools
SOLANA_BIN = "solana"
ANCHOR_BIN = "anchor"
CARGO_BIN = "cargo"

# Log Configuration
LOG_DATE_FORMAT = "%Y-%m-%d"
LOG_TIME_FORMAT = "%H-%M-%S"

# Messages
MESSAGE_ALREADY_DEPLOYED = (
    "Program already deployed. Use `fleet upgrade` if you want to upgrade the program."
)
MESSAGE_IDL_FINALIZE = (
    "Please manually run `anchor idl set-buffer {program_key} --buffer {buffer}` "
    "to publish the new IDL"
)
