import json
import tempfile
import unittest
from unittest import mock
from pathlib import Path

from wifiupload.store import MemoryDocumentStore, JSONDocumentStore, DocumentStoreError


class TestMemoryDocumentStore(unittest.TestCase):
	def test_folders_and_files(self) -> None:
		store = MemoryDocumentStore()
		folder_id = store.add_folder('Notes')
		self.assertEqual(store.folder_by_name('Notes'), folder_id)
		self.assertIsNone(store.folder_by_name('Other'))
		store.add_file('a.txt', 'hello')
		store.add_file('b.txt', 'hi', folder_id)
		self.assertEqual(store.list_folders(), ['Notes'])
		self.assertEqual([x.name for x in store.files_in_folder(None)], ['a.txt'])
		self.assertEqual([x.name for x in store.files_in_folder(folder_id)], ['b.txt'])


class TestJSONDocumentStore(unittest.TestCase):
	def test_records_survive_reload(self) -> None:
		with tempfile.TemporaryDirectory() as tmp:
			store = JSONDocumentStore(tmp)
			folder_id = store.add_folder('Notes')
			file_id = store.add_file('a.txt', 'héllo', folder_id)

			record = json.loads((Path(tmp) / 'TextFiles' / ('%s.json' % file_id)).read_text(encoding='utf-8'))
			self.assertEqual(record['folderId'], str(folder_id))
			self.assertEqual(record['content'], 'héllo')

			reloaded = JSONDocumentStore(tmp)
			self.assertEqual(reloaded.list_folders(), ['Notes'])
			self.assertEqual(reloaded.folder_by_name('Notes'), folder_id)
			self.assertEqual(len(reloaded.files), 1)
			self.assertEqual(reloaded.files[0].id, file_id)
			self.assertEqual(reloaded.files[0].folder_id, folder_id)

	def test_unreadable_records_are_skipped(self) -> None:
		with tempfile.TemporaryDirectory() as tmp:
			store = JSONDocumentStore(tmp)
			store.add_folder('Notes')
			(Path(tmp) / 'Folders' / 'broken.json').write_text('{', encoding='utf-8')
			self.assertEqual(JSONDocumentStore(tmp).list_folders(), ['Notes'])

	def test_failed_write_leaves_no_temp_file(self) -> None:
		with tempfile.TemporaryDirectory() as tmp:
			store = JSONDocumentStore(tmp)
			with mock.patch('wifiupload.store.json.dump', side_effect = TypeError('not serializable')):
				with self.assertRaises(DocumentStoreError):
					store.add_folder('Notes')
			with mock.patch('wifiupload.store.os.replace', side_effect = OSError('disk full')):
				with self.assertRaises(DocumentStoreError):
					store.add_file('a.txt', 'hello')
			self.assertEqual(list((Path(tmp) / 'Folders').iterdir()), [])
			self.assertEqual(list((Path(tmp) / 'TextFiles').iterdir()), [])
			self.assertEqual(store.list_folders(), [])
			self.assertEqual(store.files, [])


if __name__ == "__main__":
	unittest.main()
