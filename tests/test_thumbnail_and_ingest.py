import base64
import io
import unittest
from unittest import mock

from PIL import Image

from game import (
    SessionState,
    StartGame,
    NewCard,
    Ingestor,
    ThumbnailError,
    ingest_files,
    is_supported_filename,
    make_thumbnail,
    update,
)


def image_bytes(fmt, size=(400, 200), color=(200, 30, 30)):
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()

def oversized_png():
    """A small file whose pixel count is past Pillow's decompression-bomb limit."""
    buf = io.BytesIO()
    Image.new("1", (14000, 14000)).save(buf, format="PNG")
    return buf.getvalue()


def decode_data_uri(uri):
    _, b64 = uri.split(",", 1)
    return Image.open(io.BytesIO(base64.b64decode(b64)))


class TestThumbnail(unittest.TestCase):
    def test_given_names_when_checking_extension_then_png_and_gif_only(self):
        self.assertTrue(is_supported_filename("cat.png"))
        self.assertTrue(is_supported_filename("CAT.PNG"))
        self.assertTrue(is_supported_filename("dog.Gif"))
        self.assertFalse(is_supported_filename("photo.txt"))
        self.assertFalse(is_supported_filename("photo.jpg"))
        self.assertFalse(is_supported_filename("png"))

    def test_given_wide_png_when_thumbnailed_then_png_data_uri_within_bound(self):
        uri = make_thumbnail(image_bytes("PNG", (400, 200)))
        self.assertTrue(uri.startswith("data:image/png;base64,"))
        img = decode_data_uri(uri)
        self.assertEqual(img.format, "PNG")
        self.assertEqual(img.size, (250, 125))

    def test_given_small_gif_when_thumbnailed_then_gif_fit_to_bound(self):
        uri = make_thumbnail(image_bytes("GIF", (20, 40)), bound=100)
        self.assertTrue(uri.startswith("data:image/gif;base64,"))
        img = decode_data_uri(uri)
        self.assertEqual(img.format, "GIF")
        self.assertEqual(img.size, (50, 100))

    def test_given_garbage_or_other_format_when_thumbnailed_then_error(self):
        with self.assertRaises(ThumbnailError):
            make_thumbnail(b"not an image")
        with self.assertRaises(ThumbnailError):
            make_thumbnail(image_bytes("BMP"))

    def test_given_oversized_png_when_thumbnailed_then_thumbnail_error(self):
        with self.assertRaises(ThumbnailError):
            make_thumbnail(oversized_png())


class TestIngest(unittest.TestCase):
    def test_given_mixed_files_when_ingested_then_one_card_per_good_image(self):
        files = [
            ("a.png", image_bytes("PNG")),
            ("b.gif", image_bytes("GIF")),
            ("broken.png", b"\x89PNG garbage"),
            ("photo.txt", b"hello"),
        ]
        with self.assertLogs("matching_core.ingest", level="WARNING") as logs:
            state, added, skipped = ingest_files(SessionState(), files)
        self.assertEqual(added, 2)
        self.assertEqual(skipped, ["photo.txt"])
        self.assertEqual(len(state.deck), 2)
        prefixes = sorted(c.photo.split(";")[0] for c in state.deck)
        self.assertEqual(prefixes, ["data:image/gif", "data:image/png"])
        self.assertTrue(all(c.text is None for c in state.deck))
        self.assertTrue(any("broken.png" in line for line in logs.output))

    def test_given_oversized_png_when_ingested_then_dropped_and_logged(self):
        files = [("huge.png", oversized_png()), ("ok.png", image_bytes("PNG", (10, 10)))]
        with self.assertLogs("matching_core.ingest", level="WARNING") as logs:
            state, added, skipped = ingest_files(SessionState(), files)
        self.assertEqual(added, 1)
        self.assertEqual(len(state.deck), 1)
        self.assertTrue(any("huge.png" in line for line in logs.output))

    def test_given_pipeline_crash_when_ingested_then_failure_logged(self):
        with mock.patch("matching_core.ingest.make_thumbnail", side_effect=RuntimeError("boom")):
            with self.assertLogs("matching_core.ingest", level="WARNING") as logs:
                state, added, _ = ingest_files(SessionState(), [("a.png", b"x")])
        self.assertEqual(added, 0)
        self.assertEqual(len(state.deck), 0)
        self.assertTrue(any("a.png" in line and "boom" in line for line in logs.output))

    def test_given_unsupported_name_when_submitted_then_pipeline_not_called(self):
        with mock.patch("matching_core.ingest.make_thumbnail") as thumb:
            with Ingestor() as ing:
                self.assertIsNone(ing.submit("photo.txt", b"data"))
            thumb.assert_not_called()

    def test_given_completed_ingestion_when_drained_then_new_card_actions_applied(self):
        with Ingestor() as ing:
            fut = ing.submit("a.png", image_bytes("PNG", (10, 10)))
            self.assertTrue(fut.result())
            state, applied = ing.drain(SessionState())
            self.assertEqual(applied, 1)
            self.assertEqual(len(state.deck), 1)
            state, applied = ing.drain(state)
            self.assertEqual(applied, 0)

    def test_given_game_in_progress_when_ingestion_lands_then_deck_unchanged(self):
        s = update(update(update(SessionState(), NewCard(photo="x")), NewCard(photo="y")), StartGame())
        state, added, _ = ingest_files(s, [("a.png", image_bytes("PNG", (10, 10)))])
        self.assertEqual(len(state.deck), 2)


if __name__ == '__main__':
    unittest.main(verbosity=2)
