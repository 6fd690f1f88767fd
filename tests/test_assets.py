import tempfile
import unittest
from pathlib import Path

import requests

from persistence.assets import DownloadFailure, DownloadFailureKind, asset_path, download_asset, partial_path
from tests.page_fixtures import FakeHTTP, fake_response

IMG = "https://cdn.example/img.jpg"

class TestDownloadAsset(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_asset_path_uses_identifier(self):
        self.assertEqual(asset_path("jane", self.dir), self.dir / "jane.jpg")

    def test_streams_body_to_file(self):
        body = b"\xff\xd8\xff\xe0 jpeg bytes"
        response = fake_response(200, body, content_type="image/jpeg")
        http = FakeHTTP({IMG: response})

        result = download_asset(IMG, self.dir / "jane.jpg", session=http)

        self.assertEqual(result, self.dir / "jane.jpg")
        self.assertEqual(result.read_bytes(), body)
        self.assertTrue(http.calls[0][1]["stream"])
        response.close.assert_called_once()

    def test_truncates_existing_file(self):
        target = self.dir / "jane.jpg"
        target.write_bytes(b"a much longer previous image body")
        download_asset(IMG, target, session=FakeHTTP({IMG: fake_response(200, b"new", content_type="image/jpeg")}))
        self.assertEqual(target.read_bytes(), b"new")

    def test_not_found_status(self):
        http = FakeHTTP({IMG: fake_response(404, b"", content_type="text/html")})
        result = download_asset(IMG, self.dir / "jane.jpg", session=http)
        self.assertIsInstance(result, DownloadFailure)
        self.assertEqual(result.kind, DownloadFailureKind.HTTP_STATUS)
        self.assertEqual(result.http_status, 404)
        self.assertFalse((self.dir / "jane.jpg").exists())

    def test_connection_error(self):
        http = FakeHTTP({IMG: requests.exceptions.ConnectionError("refused")})
        result = download_asset(IMG, self.dir / "jane.jpg", session=http)
        self.assertEqual(result.kind, DownloadFailureKind.CONNECTION)

    def test_unwritable_destination(self):
        http = FakeHTTP({IMG: fake_response(200, b"img", content_type="image/jpeg")})
        result = download_asset(IMG, self.dir / "missing" / "jane.jpg", session=http)
        self.assertEqual(result.kind, DownloadFailureKind.IO)

    def broken_stream(self):
        response = fake_response(200, b"", content_type="image/jpeg")

        def chunks(chunk_size):
            yield b"half-"
            raise requests.exceptions.ChunkedEncodingError("connection broken")

        response.iter_content.side_effect = chunks
        return response

    def test_interrupted_body_leaves_no_file(self):
        target = self.dir / "jane.jpg"
        result = download_asset(IMG, target, session=FakeHTTP({IMG: self.broken_stream()}))

        self.assertIsInstance(result, DownloadFailure)
        self.assertEqual(result.kind, DownloadFailureKind.CONNECTION)
        self.assertFalse(target.exists())
        self.assertFalse(partial_path(target).exists())
        self.assertEqual(list(self.dir.iterdir()), [])

    def test_interrupted_body_keeps_previous_image(self):
        target = self.dir / "jane.jpg"
        target.write_bytes(b"previous complete image")
        download_asset(IMG, target, session=FakeHTTP({IMG: self.broken_stream()}))
        self.assertEqual(target.read_bytes(), b"previous complete image")
        self.assertFalse(partial_path(target).exists())

    def test_successful_download_leaves_no_partial_file(self):
        target = self.dir / "jane.jpg"
        download_asset(IMG, target, session=FakeHTTP({IMG: fake_response(200, b"img", content_type="image/jpeg")}))
        self.assertEqual(list(self.dir.iterdir()), [target])

if __name__ == "__main__":
    unittest.main()
