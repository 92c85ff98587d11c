import unittest

from inspector.texinfo import (
    DTEXINFO_SIZE, decode_texinfo, normalize_texture_name, read_cstring,
)

from bspfile import texinfo_record


class ReadCStringTest(unittest.TestCase):
    def test_stops_at_nul(self) -> None:
        self.assertEqual(read_cstring(b'abc\x00def', 0, 32), 'abc')

    def test_capped_at_max_len(self) -> None:
        self.assertEqual(read_cstring(b'x' * 40, 0, 32), 'x' * 32)

    def test_capped_at_buffer_end(self) -> None:
        self.assertEqual(read_cstring(b'..wall', 2, 32), 'wall')

    def test_trims_whitespace(self) -> None:
        self.assertEqual(read_cstring(b'  e1u1/floor \x00', 0, 32), 'e1u1/floor')


class NormalizeTextureNameTest(unittest.TestCase):
    def test_plain_name(self) -> None:
        self.assertEqual(normalize_texture_name('e1u1/wall01'), 'textures/e1u1/wall01.wal')

    def test_strips_prefix_and_backslashes(self) -> None:
        self.assertEqual(normalize_texture_name('Textures\\e1u1\\wall01'), 'textures/e1u1/wall01.wal')
        self.assertEqual(normalize_texture_name('textures//e1u1/sky'), 'textures/e1u1/sky.wal')

    def test_existing_extension_still_gets_wal(self) -> None:
        self.assertEqual(normalize_texture_name('e1u1/glass.tga'), 'textures/e1u1/glass.tga.wal')

    def test_idempotent_on_own_output(self) -> None:
        once = normalize_texture_name('textures\\base\\metal')
        basename = once[len('textures/'):-len('.wal')]
        self.assertEqual(normalize_texture_name('textures/' + basename), once)
        self.assertTrue(once.endswith('.wal'))


class DecodeTexinfoTest(unittest.TestCase):
    def test_single_record(self) -> None:
        data = texinfo_record(b'e1u1/wall01')
        self.assertEqual(len(data), DTEXINFO_SIZE)
        self.assertEqual(decode_texinfo(data, 0, len(data)), {'textures/e1u1/wall01.wal'})

    def test_dedupes_and_skips_empty_names(self) -> None:
        data = b''.join(texinfo_record(n) for n in (b'a/b', b'', b'   ', b'a/b', b'c/d'))
        self.assertEqual(decode_texinfo(data, 0, len(data)), {'textures/a/b.wal', 'textures/c/d.wal'})

    def test_partial_trailing_record_ignored(self) -> None:
        data = texinfo_record(b'a/b') + texinfo_record(b'c/d')[:75]
        self.assertEqual(decode_texinfo(data, 0, len(data)), {'textures/a/b.wal'})

    def test_respects_lump_offset(self) -> None:
        data = b'\xff' * 12 + texinfo_record(b'e2u3/door')
        self.assertEqual(decode_texinfo(data, 12, DTEXINFO_SIZE), {'textures/e2u3/door.wal'})
