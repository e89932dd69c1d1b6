from wowsrp.srp import SRP6
from wowsrp.session_cipher import encrypt, decrypt
from wowsrp.constants import APP_NAME, SALT_LEN
import secrets
import logging
import argparse
import sys


logger = logging.getLogger(__name__)


class LevelBasedFormatter(logging.Formatter):
    FORMATS = {
        logging.DEBUG:    "%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        logging.INFO:     "%(asctime)s [%(levelname)s] -  %(message)s",
        logging.WARNING:  "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        logging.ERROR:    "%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s",
        logging.CRITICAL: "%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d - %(message)s"
    }

    def format(self, record):
        fmt = self.FORMATS.get(record.levelno, self._fmt)
        formatter = logging.Formatter(fmt)
        return formatter.format(record)

def setup_logging(debug: bool) -> None:
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # main() may run more than once in a process, install our handler only once
    if any(isinstance(h.formatter, LevelBasedFormatter) for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LevelBasedFormatter())
    logger.addHandler(handler)

def parse_args(argv: list = None):
    parser = argparse.ArgumentParser(description=f"{APP_NAME} - SRP-6 game authentication toolbox")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    verifier = commands.add_parser("verifier", help="Create the salt and verifier of an account")
    verifier.add_argument("username")
    verifier.add_argument("password")
    verifier.add_argument("--salt", help="Hex salt (32 bytes), random if omitted")

    for name in ("encrypt", "decrypt"):
        cipher = commands.add_parser(name, help=f"{name.capitalize()} hex data with a session key")
        cipher.add_argument("key", help="Hex session key")
        cipher.add_argument("data", help="Hex data")

    return parser.parse_args(argv)


def run(args) -> str:
    if args.command == "verifier":
        salt = bytes.fromhex(args.salt) if args.salt else secrets.token_bytes(SALT_LEN)
        verifier = SRP6().calculate_password_verifier(args.username, args.password, salt)
        logger.debug("Created verifier for %s", args.username)
        return f"salt: {salt.hex()}\nverifier: {verifier.hex()}"

    transform = encrypt if args.command == "encrypt" else decrypt
    return transform(bytes.fromhex(args.data), bytes.fromhex(args.key)).hex()


def main(argv: list = None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        print(run(args))
    except ValueError as e:
        logger.error("Rejected input: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
