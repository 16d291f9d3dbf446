import socket

import pytest


def _info(family, address):
    sockaddr = (address, 0) if family == socket.AF_INET else (address, 0, 0, 0)
    return (family, socket.SOCK_STREAM, 6, "", sockaddr)


def test_first_address_wins(monkeypatch):
    from ec2ssh.services.resolver import resolve_address

    seen = []

    def fake_getaddrinfo(host, port, *args, **kwargs):
        seen.append(host)
        return [_info(socket.AF_INET, "10.0.0.5"), _info(socket.AF_INET, "10.0.0.6")]

    monkeypatch.setattr(socket, "getaddrinfo", fake_getaddrinfo)

    assert resolve_address("box.internal") == "10.0.0.5"
    assert seen == ["box.internal"]


def test_no_family_preference(monkeypatch):
    from ec2ssh.services.resolver import resolve_address

    monkeypatch.setattr(
        socket,
        "getaddrinfo",
        lambda *a, **kw: [_info(socket.AF_INET6, "fd00::5"), _info(socket.AF_INET, "10.0.0.5")],
    )

    assert resolve_address("box.internal") == "fd00::5"


def test_literal_address_resolves_to_itself():
    from ec2ssh.services.resolver import resolve_address

    assert resolve_address("127.0.0.1") == "127.0.0.1"


def test_unresolvable_host(monkeypatch):
    from ec2ssh.core.exceptions import ResolutionError
    from ec2ssh.services.resolver import resolve_address

    def fail(*args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)

    with pytest.raises(ResolutionError, match="nowhere.invalid"):
        resolve_address("nowhere.invalid")


def test_empty_answer(monkeypatch):
    from ec2ssh.core.exceptions import ResolutionError
    from ec2ssh.services.resolver import resolve_address

    monkeypatch.setattr(socket, "getaddrinfo", lambda *a, **kw: [])

    with pytest.raises(ResolutionError):
        resolve_address("box.internal")
