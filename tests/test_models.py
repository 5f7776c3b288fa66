"""
Tests for decoding archive metadata into typed records (no network)
"""
import unittest

from archive_feed.core import ArchiveItem, Descriptor, FileEntry


class TestFileEntryFromRaw(unittest.TestCase):
    """Permissive per-file conversion"""

    def test_string_fields_are_converted(self):
        entry = FileEntry.from_raw({
            'name': 'track01.mp3',
            'title': 'Opening',
            'track': '1',
            'artist': 'The Band',
            'album': 'Live',
            'source': 'original',
            'mtime': '1600000000',
            'size': '4096',
            'length': '3:45',
            'sha1': 'abc123',
        })
        self.assertEqual(entry.name, 'track01.mp3')
        self.assertEqual(entry.track, '1')
        self.assertEqual(entry.mtime, 1600000000)
        self.assertEqual(entry.size, 4096)
        self.assertEqual(entry.length, 225.0)
        self.assertEqual(entry.sha1, 'abc123')

    def test_missing_fields_default(self):
        entry = FileEntry.from_raw({'name': 'a.mp3'})
        self.assertEqual(entry.mtime, 0)
        self.assertEqual(entry.size, 0)
        self.assertEqual(entry.length, 0.0)
        self.assertEqual(entry.artist, '')
        self.assertEqual(entry.source, '')

    def test_bad_numbers_default_to_zero(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'mtime': 'yesterday', 'size': '12kb', 'length': '3:xx'})
        self.assertEqual(entry.mtime, 0)
        self.assertEqual(entry.size, 0)
        self.assertEqual(entry.length, 0.0)

    def test_loose_number_spellings_default_to_zero(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'mtime': ' 83 ', 'size': '1_000', 'length': 'nan'})
        self.assertEqual(entry.mtime, 0)
        self.assertEqual(entry.size, 0)
        self.assertEqual(entry.length, 0.0)
        self.assertEqual(FileEntry.from_raw({'name': 'a.mp3', 'size': '+12'}).size, 12)

    def test_out_of_range_mtime_defaults_to_zero(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'mtime': '99999999999999999', 'size': '10'})
        self.assertEqual(entry.mtime, 0)
        self.assertEqual(entry.size, 10)

    def test_json_numbers_are_accepted(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'mtime': 1600000000, 'size': 10, 'length': 83.2})
        self.assertEqual(entry.mtime, 1600000000)
        self.assertEqual(entry.size, 10)
        self.assertAlmostEqual(entry.length, 83.2)

    def test_artist_falls_back_to_creator(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'creator': 'Someone'})
        self.assertEqual(entry.artist, 'Someone')
        entry = FileEntry.from_raw({'name': 'a.mp3', 'artist': 'Artist', 'creator': 'Someone'})
        self.assertEqual(entry.artist, 'Artist')

    def test_list_values_are_joined(self):
        entry = FileEntry.from_raw({'name': 'a.mp3', 'creator': ['One', 'Two']})
        self.assertEqual(entry.artist, 'One, Two')

    def test_object_value_is_rejected(self):
        with self.assertRaises(ValueError):
            FileEntry.from_raw({'name': 'a.mp3', 'title': {'nested': True}})

    def test_non_object_entry_is_rejected(self):
        with self.assertRaises(ValueError):
            FileEntry.from_raw(['a.mp3'])


class TestTitleDescription(unittest.TestCase):
    def test_fallback_to_name(self):
        entry = FileEntry(name='episode.mp3')
        self.assertEqual(entry.title_description(), ('episode.mp3', 'episode.mp3'))

    def test_title_and_album_win(self):
        entry = FileEntry(name='episode.mp3', title='Episode 1', album='Season 1')
        self.assertEqual(entry.title_description(), ('Episode 1', 'Season 1'))


class TestArchiveItem(unittest.TestCase):
    def _document(self, **overrides):
        doc = {
            'created': 1700000100,
            'item_last_updated': 1700000000,
            'dir': '/5/items/demo',
            'server': 'ia800.us.archive.org',
            'workable_servers': ['ia800.us.archive.org', 'ia600.us.archive.org'],
            'metadata': {'identifier': 'demo', 'title': 'Demo', 'description': 'A demo item'},
            'files': [
                {'name': 'a.mp3', 'source': 'original'},
                {'name': 'a.ogg', 'source': 'derivative'},
                {'name': 'b.mp3', 'source': 'original'},
            ],
        }
        doc.update(overrides)
        return doc

    def test_from_dict(self):
        item = ArchiveItem.from_dict(self._document())
        self.assertEqual(item.created, 1700000100)
        self.assertEqual(item.last_updated, 1700000000)
        self.assertEqual(item.dir, '/5/items/demo')
        self.assertEqual(item.server, 'ia800.us.archive.org')
        self.assertEqual(len(item.workable_servers), 2)
        self.assertEqual(item.metadata, Descriptor('demo', 'Demo', 'A demo item'))
        self.assertEqual([f.name for f in item.files], ['a.mp3', 'a.ogg', 'b.mp3'])

    def test_empty_document_gives_zero_values(self):
        item = ArchiveItem.from_dict({})
        self.assertEqual(item.files, [])
        self.assertEqual(item.last_updated, 0)
        self.assertEqual(item.metadata, Descriptor())

    def test_only_originals_keeps_order(self):
        item = ArchiveItem.from_dict(self._document())
        item.only_originals()
        self.assertEqual([f.name for f in item.files], ['a.mp3', 'b.mp3'])

    def test_only_originals_drops_unknown_sources(self):
        item = ArchiveItem.from_dict(self._document(files=[
            {'name': 'x.mp3', 'source': 'metadata'},
            {'name': 'y.mp3'},
            {'name': 'z.mp3', 'source': 'original'},
        ]))
        item.only_originals()
        self.assertEqual([f.name for f in item.files], ['z.mp3'])

    def test_list_description_is_joined(self):
        item = ArchiveItem.from_dict(self._document(metadata={'identifier': 'demo', 'description': ['one', 'two']}))
        self.assertEqual(item.metadata.description, 'one\n\ntwo')

    def test_shape_errors(self):
        bad_documents = [
            [],
            'text',
            self._document(files={'name': 'a.mp3'}),
            self._document(files=['a.mp3']),
            self._document(created='1700000000'),
            self._document(item_last_updated=True),
            self._document(dir=5),
            self._document(workable_servers='ia800'),
            self._document(metadata=['demo']),
        ]
        for document in bad_documents:
            with self.subTest(document=document):
                with self.assertRaises(ValueError):
                    ArchiveItem.from_dict(document)

    def test_file_url_escapes_name(self):
        item = ArchiveItem(server='ia800.us.archive.org', dir='/5/items/demo')
        self.assertEqual(
            item.file_url(FileEntry(name='a b.mp3')),
            'https://ia800.us.archive.org/5/items/demo/a%20b.mp3',
        )
        self.assertEqual(
            item.file_url(FileEntry(name='dir/x?y#z;1,2.mp3')),
            'https://ia800.us.archive.org/5/items/demo/dir%2Fx%3Fy%23z%3B1%2C2.mp3',
        )
        self.assertEqual(
            item.file_url(FileEntry(name='a&b+c=d@e:f$.mp3')),
            'https://ia800.us.archive.org/5/items/demo/a&b+c=d@e:f$.mp3',
        )


if __name__ == '__main__':
    unittest.main()
