"""
Tests for image file helpers
"""

import base64
import os
import sys
import tempfile
import unittest
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.image_io import save_image, load_and_encode_image, decode_image, encode_image
from getimg.exceptions.getimg_exceptions import ImageFileError, InvalidImageDataError


class TestImageIO(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.payload = bytes(range(256)) * 4

    def tearDown(self):
        self.tmp.cleanup()

    def test_saved_image_matches_decoded_payload(self):
        """Saving then reading back gives the decoded bytes unchanged"""
        encoded = base64.b64encode(self.payload).decode("ascii")
        target = self.dir / "out.png"

        written = save_image(decode_image(encoded), target)

        self.assertEqual(written, target)
        self.assertEqual(target.read_bytes(), self.payload)

    def test_save_overwrites_existing_file(self):
        target = self.dir / "out.png"
        target.write_bytes(b"old contents that are longer")
        save_image(b"new", target)
        self.assertEqual(target.read_bytes(), b"new")

    def test_save_to_missing_directory_fails(self):
        with self.assertRaises(ImageFileError):
            save_image(self.payload, self.dir / "missing" / "out.png")

    def test_save_to_directory_path_fails(self):
        with self.assertRaises(ImageFileError):
            save_image(self.payload, self.dir)

    def test_load_and_encode(self):
        source = self.dir / "in.jpg"
        source.write_bytes(self.payload)

        encoded = load_and_encode_image(str(source))

        self.assertEqual(encoded, base64.b64encode(self.payload).decode("ascii"))

    def test_load_missing_file_fails(self):
        with self.assertRaises(ImageFileError) as ctx:
            load_and_encode_image(self.dir / "nope.png")
        self.assertIn("nope.png", ctx.exception.message)

    def test_decode_rejects_invalid_base64(self):
        for bad in ("", "abc", "@@@@", "aGVsbG8=\x00"):
            with self.assertRaises(InvalidImageDataError):
                decode_image(bad)

    def test_encode_is_plain_base64(self):
        self.assertEqual(encode_image(b"hello"), "aGVsbG8=")


if __name__ == '__main__':
    unittest.main()
