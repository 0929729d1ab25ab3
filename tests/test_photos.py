"""
Tests for photo upload and delete endpoints, and the image host allow-list
"""

import pytest

from closet_worthy.services.storage import StorageService, is_allowed_image_url

from conftest import PHOTO_BASE_URL


async def test_upload_returns_urls_in_order(client, fake_storage):
    files = [
        ("files", ("front.jpg", b"front-bytes", "image/jpeg")),
        ("files", ("back.PNG", b"back-bytes", "image/png")),
    ]

    response = await client.post("/api/photos", files=files)

    assert response.status_code == 201
    assert response.json()["urls"] == [
        f"{PHOTO_BASE_URL}/closet-photos/photo_1.jpg",
        f"{PHOTO_BASE_URL}/closet-photos/photo_2.png",
    ]
    assert fake_storage.uploads == [(b"front-bytes", "jpg"), (b"back-bytes", "png")]


async def test_upload_rejects_unsupported_type_before_uploading(client, fake_storage):
    files = [
        ("files", ("front.jpg", b"front-bytes", "image/jpeg")),
        ("files", ("notes.txt", b"hello", "text/plain")),
    ]

    response = await client.post("/api/photos", files=files)

    assert response.status_code == 400
    assert "notes.txt" in response.json()["detail"]
    assert fake_storage.uploads == []


async def test_upload_rejects_empty_file(client, fake_storage):
    response = await client.post("/api/photos", files=[("files", ("front.jpg", b"", "image/jpeg"))])

    assert response.status_code == 400
    assert fake_storage.uploads == []


async def test_delete_photo(client, fake_storage):
    url = f"{PHOTO_BASE_URL}/closet-photos/photo_1.jpg"

    response = await client.delete("/api/photos", params={"url": url})

    assert response.status_code == 204
    assert fake_storage.deleted == [url]


async def test_delete_foreign_photo_returns_404(client, fake_storage):
    response = await client.delete("/api/photos", params={"url": "https://example.com/a.jpg"})

    assert response.status_code == 404


@pytest.mark.parametrize(
    "url, allowed",
    [
        ("https://closet-photos.s3.ca-central-1.amazonaws.com/closet-photos/a.jpg", True),
        ("https://CLOSET-PHOTOS.S3.AMAZONAWS.COM/a.jpg", True),
        ("http://closet-photos.s3.amazonaws.com/a.jpg", False),
        ("https://example.com/a.jpg", False),
        ("https://amazonaws.com.evil.example/a.jpg", False),
        ("not a url", False),
    ],
)
def test_is_allowed_image_url(url, allowed):
    assert is_allowed_image_url(url, patterns=["*.amazonaws.com"]) is allowed


def test_is_allowed_image_url_with_exact_host():
    assert is_allowed_image_url("https://cdn.example.com/a.jpg", patterns=["cdn.example.com"])
    assert not is_allowed_image_url("https://img.example.com/a.jpg", patterns=["cdn.example.com"])


def test_generate_key_format():
    key = StorageService.generate_key("closet-photos", "jpg")

    folder, filename = key.split("/")
    assert folder == "closet-photos"
    stamp, rest = filename.split("_")
    assert len(stamp) == 8 and stamp.isdigit()
    assert rest.endswith(".jpg")
    assert len(rest) == len("abcd1234.jpg")
