import pytest
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from pyld_rsasig import LdsError, LdsTypeError
from pyld_rsasig.keys import load_private_key, load_public_key

from conftest import ALYSSAS_PRIVATE_KEY_PEM, ALYSSAS_PUBLIC_KEY_PEM

def _public_numbers(key):
    return key.public_numbers() if hasattr(key, "public_numbers") \
        else key.public_key().public_numbers()

def test_load_pem(tmp_path, private_key, public_key):
    (tmp_path / "alyssa.pem").write_bytes(ALYSSAS_PRIVATE_KEY_PEM)
    (tmp_path / "alyssa.pub.pem").write_bytes(ALYSSAS_PUBLIC_KEY_PEM)
    loaded = load_private_key(str(tmp_path / "alyssa.pem"))
    assert(_public_numbers(loaded) == _public_numbers(private_key))
    loaded = load_public_key(str(tmp_path / "alyssa.pub.pem"))
    assert(_public_numbers(loaded) == _public_numbers(public_key))

def test_load_der(tmp_path, private_key, public_key):
    (tmp_path / "alyssa.der").write_bytes(private_key.private_bytes(
        serialization.Encoding.DER, serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption()))
    (tmp_path / "alyssa.pub").write_bytes(public_key.public_bytes(
        serialization.Encoding.DER,
        serialization.PublicFormat.SubjectPublicKeyInfo))
    loaded = load_private_key(str(tmp_path / "alyssa.der"))
    assert(_public_numbers(loaded) == _public_numbers(private_key))
    # unknown extension, format guessed from the content
    loaded = load_public_key(str(tmp_path / "alyssa.pub"))
    assert(_public_numbers(loaded) == _public_numbers(public_key))
    loaded = load_public_key(str(tmp_path / "alyssa.pub"), "der")
    assert(_public_numbers(loaded) == _public_numbers(public_key))

def test_load_wrong_format(tmp_path):
    (tmp_path / "alyssa.key").write_bytes(ALYSSAS_PRIVATE_KEY_PEM)
    with pytest.raises(LdsError):
        load_private_key(str(tmp_path / "alyssa.key"), "der")
    with pytest.raises(LdsTypeError):
        load_private_key(str(tmp_path / "alyssa.key"), "jwk")
    (tmp_path / "garbage.key").write_bytes(b"garbage")
    with pytest.raises(LdsError):
        load_private_key(str(tmp_path / "garbage.key"))

def test_load_not_rsa(tmp_path):
    key = ec.generate_private_key(ec.SECP256R1(), default_backend())
    (tmp_path / "ec.pem").write_bytes(key.private_bytes(
        serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption()))
    with pytest.raises(LdsTypeError):
        load_private_key(str(tmp_path / "ec.pem"))

def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_public_key(str(tmp_path / "missing.pem"))
