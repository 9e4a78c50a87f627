import pytest

from affinity_mcp.affinity import AffinityApp, DEFAULT_APP, detect_app_from_path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/work/photo.afphoto", AffinityApp.PHOTO),
        ("logo.afdesign", AffinityApp.DESIGNER),
        ("book.afpub", AffinityApp.PUBLISHER),
        ("BOOK.AFPUB", AffinityApp.PUBLISHER),
        ("picture.png", AffinityApp.PHOTO),
        ("no_extension", AffinityApp.PHOTO),
        ("", AffinityApp.PHOTO),
        ("archive.afdesign.zip", AffinityApp.PHOTO),
    ],
)
def test_detect_app_from_path(path: str, expected: AffinityApp) -> None:
    assert detect_app_from_path(path) is expected


def test_default_app_is_photo() -> None:
    assert DEFAULT_APP is AffinityApp.PHOTO
    assert DEFAULT_APP.app_name == "Affinity Photo"
