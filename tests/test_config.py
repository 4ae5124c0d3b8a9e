import pytest

from bill_recognition import RecognitionSettings, load_settings
from bill_recognition.config import DEFAULT_MAX_IMAGE_BYTES


def test_defaults_when_unset():
    settings = load_settings({})

    assert settings == RecognitionSettings()
    assert settings.enabled is False
    assert settings.max_image_bytes == DEFAULT_MAX_IMAGE_BYTES
    assert settings.ocr_provider == "paddle-text"
    assert settings.assemble_concurrency == 1


def test_reads_prefixed_variables():
    settings = load_settings(
        {
            "BILL_RECOGNITION_ENABLED": "yes",
            "BILL_RECOGNITION_MAX_IMAGE_BYTES": "2048",
            "BILL_RECOGNITION_OCR_PROVIDER": "Tesseract",
            "BILL_RECOGNITION_OCR_TIMEOUT": "2.5",
            "BILL_RECOGNITION_TESSERACT_CMD": "/opt/ocr/tesseract",
            "BILL_RECOGNITION_TESSERACT_LANG": "eng",
            "BILL_RECOGNITION_ASSEMBLE_CONCURRENCY": "4",
        }
    )

    assert settings.enabled is True
    assert settings.max_image_bytes == 2048
    assert settings.ocr_provider == "tesseract"
    assert settings.ocr_timeout_sec == 2.5
    assert settings.tesseract_command == "/opt/ocr/tesseract"
    assert settings.tesseract_language == "eng"
    assert settings.assemble_concurrency == 4


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("BILL_RECOGNITION_ENABLED", "1")
    monkeypatch.setenv("BILL_RECOGNITION_OCR_ENDPOINT", " http://ocr.local ")

    settings = load_settings()

    assert settings.enabled is True
    assert settings.ocr_endpoint == "http://ocr.local"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("BILL_RECOGNITION_MAX_IMAGE_BYTES", "ten"),
        ("BILL_RECOGNITION_MAX_IMAGE_BYTES", "0"),
        ("BILL_RECOGNITION_OCR_TIMEOUT", "-1"),
        ("BILL_RECOGNITION_ASSEMBLE_CONCURRENCY", "1.5"),
        ("BILL_RECOGNITION_OCR_PROVIDER", "google-vision"),
    ],
)
def test_invalid_values_name_the_variable(key, value):
    with pytest.raises(ValueError, match=key):
        load_settings({key: value})
