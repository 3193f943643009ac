import pytest
from invitely.services.masking import FernetFieldMasker, PlainFieldMasker, get_masker, truncate_utf8
from invitely.services.security import hash_password, verify_password


def test_random_masking_hides_and_restores_value():
    masker = FernetFieldMasker("secret-one")
    masked = masker.mask("Sari Wulandari")

    assert masked != "Sari Wulandari"
    assert masker.mask("Sari Wulandari") != masked
    assert masker.unmask(masked) == "Sari Wulandari"


def test_deterministic_masking_is_stable():
    masker = FernetFieldMasker("secret-one")
    first = masker.mask("sari@example.com", deterministic=True)
    second = masker.mask("sari@example.com", deterministic=True)

    assert first == second
    assert first.startswith("siv:")
    assert masker.unmask(first) == "sari@example.com"
    assert masker.mask("budi@example.com", deterministic=True) != first


def test_empty_values_pass_through():
    masker = FernetFieldMasker("secret-one")
    assert masker.mask(None) is None
    assert masker.mask("") == ""
    assert masker.unmask(None) is None


def test_unmask_with_wrong_secret_fails():
    masked = FernetFieldMasker("secret-one").mask("0812345678")
    with pytest.raises(ValueError):
        FernetFieldMasker("secret-two").unmask(masked)


def test_empty_secret_rejected():
    with pytest.raises(ValueError):
        FernetFieldMasker("")


def test_plain_masker_is_identity():
    masker = PlainFieldMasker()
    assert masker.mask("value", deterministic=True) == "value"
    assert masker.unmask("value") == "value"


def test_get_masker_by_name():
    assert isinstance(get_masker("plain"), PlainFieldMasker)
    assert isinstance(get_masker("FERNET"), FernetFieldMasker)
    with pytest.raises(ValueError, match="Unsupported masking provider"):
        get_masker("rot13")


def test_password_hashing():
    hashed = hash_password("correct-horse-battery")

    assert hashed != "correct-horse-battery"
    assert verify_password("correct-horse-battery", hashed)
    assert not verify_password("wrong-password", hashed)
    assert not verify_password("correct-horse-battery", "not-a-bcrypt-hash")


def test_truncate_utf8_keeps_whole_characters():
    assert truncate_utf8("abcdef", 4) == "abcd"
    assert truncate_utf8("ééé", 5) == "éé"
    assert truncate_utf8("short", 64) == "short"
