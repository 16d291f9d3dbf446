from pathlib import Path

import pytest

from conftest import PUBLIC_KEY


def test_expand_home_uses_home_directory(tmp_path: Path, monkeypatch):
    from ec2ssh.services.credentials import expand_home

    monkeypatch.setenv("HOME", str(tmp_path))

    assert expand_home("~/.ssh/id_ed25519") == str(tmp_path / ".ssh" / "id_ed25519")
    assert expand_home("~") == str(tmp_path)


def test_expand_home_named_user_uses_their_home():
    import os

    from ec2ssh.services.credentials import expand_home

    pwd = pytest.importorskip("pwd")
    entry = pwd.getpwuid(os.getuid())

    assert expand_home(f"~{entry.pw_name}/.ssh/id_rsa") == str(Path(entry.pw_dir) / ".ssh" / "id_rsa")


def test_expand_home_leaves_other_paths_alone():
    from ec2ssh.services.credentials import expand_home

    assert expand_home("/etc/ssh/id_rsa") == "/etc/ssh/id_rsa"
    assert expand_home("keys/id_rsa") == "keys/id_rsa"
    assert expand_home("") == ""


def test_expand_home_failure_is_fatal(monkeypatch):
    from ec2ssh.core.exceptions import CredentialError
    from ec2ssh.services import credentials

    def no_home(self):
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(credentials.Path, "expanduser", no_home)

    with pytest.raises(CredentialError, match="home directory"):
        credentials.expand_home("~/.ssh/id_rsa")


def test_find_existing_key_returns_first_existing(tmp_path: Path, monkeypatch, key_pair: Path):
    from ec2ssh.services.credentials import find_existing_key

    monkeypatch.setenv("HOME", str(tmp_path))
    other = tmp_path / ".ssh" / "id_ecdsa"
    other.write_text("private")

    credential = find_existing_key(["~/.ssh/id_rsa", "~/.ssh/id_ed25519", str(other)])

    assert credential.private_path == key_pair
    assert credential.public_path == Path(f"{key_pair}.pub")


def test_find_existing_key_none_exist(tmp_path: Path, monkeypatch):
    from ec2ssh.core.exceptions import NoCredentialFound
    from ec2ssh.services.credentials import find_existing_key

    monkeypatch.setenv("HOME", str(tmp_path))

    with pytest.raises(NoCredentialFound) as excinfo:
        find_existing_key(["~/.ssh/id_rsa", "~/.ssh/id_ed25519"])
    assert "-i" in str(excinfo.value)

    with pytest.raises(NoCredentialFound):
        find_existing_key([])


def test_read_public_key(key_pair: Path):
    from ec2ssh.models import CredentialFile
    from ec2ssh.services.credentials import read_public_key

    assert read_public_key(CredentialFile(private_path=key_pair)) == PUBLIC_KEY


def test_read_public_key_missing_names_the_path(tmp_path: Path):
    from ec2ssh.core.exceptions import PublicKeyUnreadable
    from ec2ssh.models import CredentialFile
    from ec2ssh.services.credentials import read_public_key

    private = tmp_path / "id_rsa"
    private.write_text("private")

    with pytest.raises(PublicKeyUnreadable) as excinfo:
        read_public_key(CredentialFile(private_path=private))
    assert f"{private}.pub" in str(excinfo.value)
    assert "-i" in str(excinfo.value)
