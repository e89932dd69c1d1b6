# app metadata
APP_NAME    = "wowsrp"
APP_VERSION = "0.1"

# group parameters (big-endian hex)
SRP_N_HEX   = "894B645E89E1535BBDAD5B8B290650530801B18EBFBF5E8FAB3C82872A3E9BB7"
SRP_G       = 7
SRP_K       = 3
SRP_HASH    = "sha1"

# precomputed 20 byte constant mixed into the client proof
CLIENT_PROOF_CONSTANT_HEX = "A7C27B6C96CA6F505A7C98031173AC383AB07BDD"

# buffer sizes (bytes)
SALT_LEN               = 32
CLIENT_PRIVATE_KEY_LEN = 32
SERVER_PRIVATE_KEY_LENS = (19, 32)

RECONNECT_DATA_LEN     = 16
WORLD_SEED_LEN         = 4

# separator of the username / password pair hashed into x
CREDENTIAL_SEPARATOR   = b":"

# 4 zero bytes between username and seeds in the world server proof
WORLD_PROOF_PADDING    = b"\x00" * 4
