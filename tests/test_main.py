# tests/test_main.py
"""
Tests for the command line toolbox.
Covers:
- Verifier creation with a given and a random salt
- Encrypting and decrypting hex data
- Exit code on rejected input
- Logging setup being safe to repeat
"""

import logging
import pytest
import main


# the autouse fixture below stubs this out, keep the real one for its own test
setup_logging = main.setup_logging


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep the CLI from installing handlers on the root logger during tests."""
    monkeypatch.setattr(main, "setup_logging", lambda debug: None)


def test_verifier_with_salt(capsys):
    salt = "AFE5D28E925DBB3DAFED5D91ACA0928940E8FBFEF2D2A3CC154ADA0FE6ABEF6F"

    assert main.main(["verifier", "LF2BGFQIFQ3HZ1ZF", "MVRVMUJFWRA0IBVK", "--salt", salt]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "salt: " + salt.lower()
    assert out[1] == "verifier: 21b4153b0a938d0a69d28f2690cc3f79a99a13c40cacb525b3b79d4201eb33ff"


def test_verifier_random_salt(capsys):
    assert main.main(["verifier", "user", "pass"]) == 0

    out = capsys.readouterr().out.splitlines()
    salt = bytes.fromhex(out[0].split(": ")[1])
    assert len(salt) == 32, "Generated salt has the wrong length"


def test_encrypt_decrypt(capsys):
    key = "2EFEE7B0C177EBBDFF6676C56EFC2339BE9CAD14BF8B54BB5A86FBF81F6D424AA23CC9A3149FB175"

    assert main.main(["encrypt", key, "3d9a"]) == 0
    assert capsys.readouterr().out.strip() == "1377"

    assert main.main(["decrypt", key, "1377"]) == 0
    assert capsys.readouterr().out.strip() == "3d9a"


@pytest.mark.parametrize("argv", [
    ["verifier", "user", "pass", "--salt", "abcd"],
    ["verifier", "user", "pass", "--salt", "zz"],
    ["encrypt", "", "3d9a"],
])
def test_rejected_input(capsys, argv):
    assert main.main(argv) == 2
    assert "error:" in capsys.readouterr().err


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level

    try:
        setup_logging(False)
        setup_logging(True)

        ours = [h for h in root.handlers if isinstance(h.formatter, main.LevelBasedFormatter)]
        assert len(ours) == 1, "Repeated setup must not duplicate log handlers"
        assert root.level == logging.DEBUG, "Later calls still update the level"
    finally:
        root.handlers[:] = original_handlers
        root.setLevel(original_level)
