import base64

from lead_images.application.services.image_validation import ImageValidator


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
GIF = b"GIF89a" + b"\x00" * 8
WEBP = b"RIFF\x24\x00\x00\x00WEBPVP8 "


def test_signatures_are_admissible_and_typed():
    v = ImageValidator()
    for data, mime in [(JPEG, "image/jpeg"), (PNG, "image/png"), (GIF, "image/gif"), (WEBP, "image/webp")]:
        assert v.is_admissible_image(b64(data)) is True
        assert v.detect_content_type(b64(data)) == mime


def test_unknown_signature_rejected_but_typed_as_jpeg():
    v = ImageValidator()
    payload = b64(b"%PDF-1.7 not an image")
    assert v.is_admissible_image(payload) is False
    assert v.detect_content_type(payload) == "image/jpeg"


def test_undecodable_payload():
    v = ImageValidator()
    assert v.is_admissible_image("not base64!!") is False
    assert v.detect_content_type("not base64!!") == "application/octet-stream"
    assert v.decoded_size("not base64!!") == 0


def test_short_and_empty_payloads():
    v = ImageValidator()
    assert v.is_admissible_image("") is False
    assert v.is_admissible_image("   ") is False
    assert v.is_admissible_image(None) is False
    # Three JPEG magic bytes alone are not enough
    assert v.is_admissible_image(b64(b"\xff\xd8\xff")) is False


def test_riff_without_webp_form_type_is_not_webp():
    v = ImageValidator()
    wav = b"RIFF\x24\x00\x00\x00WAVEfmt "
    assert v.is_admissible_image(b64(wav)) is False
    assert v.is_admissible_image(b64(b"RIFF\x00\x00\x00\x00WEB")) is False


def test_size_limit():
    v = ImageValidator(max_size=64)
    assert v.is_admissible_image(b64(JPEG + b"\x00" * 44)) is True
    assert v.is_admissible_image(b64(JPEG + b"\x00" * 45)) is False
    assert v.decoded_size(b64(JPEG + b"\x00" * 45)) == 65


def test_default_size_limit_is_five_megabytes():
    v = ImageValidator()
    assert v.max_size == 5 * 1024 * 1024
    assert v.is_admissible_image(b64(JPEG + b"\x00" * (v.max_size - len(JPEG)))) is True
    assert v.is_admissible_image(b64(JPEG + b"\x00" * (v.max_size - len(JPEG) + 1))) is False


def test_data_url_and_whitespace_are_accepted():
    v = ImageValidator()
    encoded = b64(PNG)
    assert v.is_admissible_image(f"data:image/png;base64,{encoded}") is True
    assert v.detect_content_type(encoded[:8] + "\n" + encoded[8:]) == "image/png"


def test_file_names():
    v = ImageValidator()
    assert v.is_admissible_file_name("photo.jpg") is True
    assert v.is_admissible_file_name("PHOTO.JPEG") is True
    assert v.is_admissible_file_name("scan.final.webp") is True
    assert v.is_admissible_file_name("anim.GIF") is True
    assert v.is_admissible_file_name("notes.txt") is False
    assert v.is_admissible_file_name("noextension") is False
    assert v.is_admissible_file_name("") is False
    assert v.is_admissible_file_name("   ") is False
    assert v.is_admissible_file_name("dir/photo.png") is False
    assert v.is_admissible_file_name("bad\0name.png") is False
