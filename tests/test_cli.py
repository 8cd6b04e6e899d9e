import json

import pytest

from pyld_rsasig.cli import main

from conftest import ALYSSAS_PRIVATE_KEY_PEM, ALYSSAS_PUBLIC_KEY_PEM, NOTE_DOC

CREATOR = "https://dustycloud.org/tmp/alyssas-key.jsonld"

@pytest.fixture
def keys(tmp_path):
    (tmp_path / "alyssa.pem").write_bytes(ALYSSAS_PRIVATE_KEY_PEM)
    (tmp_path / "alyssa.pub.pem").write_bytes(ALYSSAS_PUBLIC_KEY_PEM)
    return str(tmp_path / "alyssa.pem"), str(tmp_path / "alyssa.pub.pem")

def _sign(tmp_path, capsys, private, *args):
    (tmp_path / "note.json").write_text(json.dumps(NOTE_DOC))
    assert(main(["sign", "-c", CREATOR, "-k", private] + list(args) +
                [str(tmp_path / "note.json")]) == 0)
    return json.loads(capsys.readouterr().out)

def test_sign_and_verify(tmp_path, capsys, keys):
    private, public = keys
    signed = _sign(tmp_path, capsys, private,
                   "--created", "2024-01-01T00:00:00.000Z",
                   "--domain", "example.com")
    assert(signed["content"] == "Hello, world!")
    assert(signed["signature"]["type"] == "RsaSignature2017")
    assert(signed["signature"]["creator"] == CREATOR)
    assert(signed["signature"]["created"] == "2024-01-01T00:00:00.000Z")
    assert(signed["signature"]["domain"] == "example.com")
    assert(len(signed["signature"]["nonce"]) == 20)

    path = tmp_path / "signed.json"
    path.write_text(json.dumps(signed))
    assert(main(["verify", "-k", public, str(path)]) == 0)
    assert(capsys.readouterr().out == "%s: OK\n" % path)

def test_sign_without_nonce(tmp_path, capsys, keys):
    private, _ = keys
    signed = _sign(tmp_path, capsys, private, "--nonce", "")
    assert("nonce" not in signed["signature"])

def test_verify_tampered(tmp_path, capsys, keys):
    private, public = keys
    signed = _sign(tmp_path, capsys, private)
    signed["content"] = "Goodbye, world!"
    path = tmp_path / "signed.json"
    path.write_text(json.dumps(signed))
    assert(main(["verify", "-k", public, str(path)]) == 1)
    assert(capsys.readouterr().out == "%s: FAILED\n" % path)

def test_verify_unsigned(tmp_path, capsys, keys):
    _, public = keys
    path = tmp_path / "note.json"
    path.write_text(json.dumps(NOTE_DOC))
    assert(main(["verify", "-k", public, str(path)]) == 1)
    assert(capsys.readouterr().out == "%s: FAILED\n" % path)

def test_bad_creator(keys):
    private, _ = keys
    with pytest.raises(SystemExit) as excinfo:
        main(["sign", "-c", "not a uri", "-k", private])
    assert(excinfo.value.code == 2)

def test_missing_key(tmp_path, capsys):
    assert(main(["verify", "-k", str(tmp_path / "missing.pem"),
                 str(tmp_path / "signed.json")]) == 1)
    assert("pyld-rsasig:" in capsys.readouterr().err)

def test_relative_id_verifies_under_another_name(tmp_path, capsys, keys):
    private, public = keys
    (tmp_path / "note.json").write_text(json.dumps(dict(NOTE_DOC, id="#note-1")))
    assert(main(["sign", "-c", CREATOR, "-k", private,
                 str(tmp_path / "note.json")]) == 0)
    signed = json.loads(capsys.readouterr().out)

    other = tmp_path / "elsewhere"
    other.mkdir()
    path = other / "signed.json"
    path.write_text(json.dumps(signed))
    assert(main(["verify", "-k", public, str(path)]) == 0)
    assert(capsys.readouterr().out == "%s: OK\n" % path)

def test_verify_bad_json_keeps_going(tmp_path, capsys, keys):
    private, public = keys
    signed = _sign(tmp_path, capsys, private)
    good = tmp_path / "signed.json"
    good.write_text(json.dumps(signed))
    bad = tmp_path / "broken.json"
    bad.write_text("{not json")
    assert(main(["verify", "-k", public, str(bad), str(good)]) == 1)
    assert(capsys.readouterr().out ==
           "%s: FAILED\n%s: OK\n" % (bad, good))
