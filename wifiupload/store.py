import os
import json
import uuid
import datetime
from pathlib import Path
from typing import List, Dict

from wifiupload import logger


class DocumentStoreError(Exception):
	pass


def utcnow():
	return datetime.datetime.now(datetime.timezone.utc)


class Folder:
	def __init__(self, name:str, id:uuid.UUID = None, created_date:datetime.datetime = None, modified_date:datetime.datetime = None):
		self.id = id if id is not None else uuid.uuid4()
		self.name = name
		self.created_date = created_date if created_date is not None else utcnow()
		self.modified_date = modified_date if modified_date is not None else self.created_date

	def __repr__(self):
		return '<Folder %s %r>' % (self.id, self.name)

	def to_dict(self):
		return {
			'id' : str(self.id),
			'name' : self.name,
			'createdDate' : self.created_date.isoformat(),
			'modifiedDate' : self.modified_date.isoformat(),
		}

	@staticmethod
	def from_dict(d:Dict):
		return Folder(
			d['name'],
			id = uuid.UUID(d['id']),
			created_date = datetime.datetime.fromisoformat(d['createdDate']),
			modified_date = datetime.datetime.fromisoformat(d['modifiedDate']),
		)


class TextFile:
	def __init__(self, name:str, content:str, folder_id:uuid.UUID = None, id:uuid.UUID = None, modified_date:datetime.datetime = None):
		self.id = id if id is not None else uuid.uuid4()
		self.name = name
		self.content = content
		self.folder_id = folder_id
		self.modified_date = modified_date if modified_date is not None else utcnow()

	def __repr__(self):
		return '<TextFile %s %r folder=%s>' % (self.id, self.name, self.folder_id)

	def to_dict(self):
		return {
			'id' : str(self.id),
			'name' : self.name,
			'content' : self.content,
			'modifiedDate' : self.modified_date.isoformat(),
			'folderId' : str(self.folder_id) if self.folder_id is not None else None,
		}

	@staticmethod
	def from_dict(d:Dict):
		folder_id = d.get('folderId')
		return TextFile(
			d['name'],
			d['content'],
			folder_id = uuid.UUID(folder_id) if folder_id is not None else None,
			id = uuid.UUID(d['id']),
			modified_date = datetime.datetime.fromisoformat(d['modifiedDate']),
		)


class DocumentStore:
	"""
	Owner of the folder and file records.

	The server calls it from a single serialized context, implementations
	do not need their own locking.
	"""
	def add_folder(self, name:str) -> uuid.UUID:
		raise NotImplementedError()

	def add_file(self, name:str, content:str, folder_id:uuid.UUID = None) -> uuid.UUID:
		raise NotImplementedError()

	def list_folders(self) -> List[str]:
		raise NotImplementedError()

	def folder_by_name(self, name:str) -> uuid.UUID:
		raise NotImplementedError()


class MemoryDocumentStore(DocumentStore):
	def __init__(self):
		self.folders:List[Folder] = []
		self.files:List[TextFile] = []

	def _store_folder(self, folder:Folder):
		pass

	def _store_file(self, textfile:TextFile):
		pass

	def add_folder(self, name:str):
		folder = Folder(name)
		self._store_folder(folder)
		self.folders.append(folder)
		self.folders.sort(key = lambda x: x.modified_date)
		return folder.id

	def add_file(self, name:str, content:str, folder_id:uuid.UUID = None):
		textfile = TextFile(name, content, folder_id = folder_id)
		self._store_file(textfile)
		self.files.append(textfile)
		self.files.sort(key = lambda x: x.modified_date)
		return textfile.id

	def list_folders(self):
		return [folder.name for folder in self.folders]

	def folder_by_name(self, name:str):
		for folder in self.folders:
			if folder.name == name:
				return folder.id
		return None

	def list_files(self):
		return list(self.files)

	def files_in_folder(self, folder_id:uuid.UUID = None):
		"""Files belonging to folder_id, None selects the files outside any folder."""
		return [x for x in self.files if x.folder_id == folder_id]


class JSONDocumentStore(MemoryDocumentStore):
	"""
	Keeps every record as <uuid>.json, folders under Folders/ and files
	under TextFiles/ of the base directory. Existing records are loaded
	when the store is created.
	"""
	def __init__(self, base_dir:str):
		MemoryDocumentStore.__init__(self)
		self.base_dir = Path(base_dir)
		self.folders_dir = self.base_dir / 'Folders'
		self.files_dir = self.base_dir / 'TextFiles'
		try:
			self.folders_dir.mkdir(parents = True, exist_ok = True)
			self.files_dir.mkdir(parents = True, exist_ok = True)
		except OSError as e:
			raise DocumentStoreError('Could not create store directories in %s' % base_dir) from e

		self.folders = self.__load(self.folders_dir, Folder.from_dict)
		self.files = self.__load(self.files_dir, TextFile.from_dict)
		self.folders.sort(key = lambda x: x.modified_date)
		self.files.sort(key = lambda x: x.modified_date)
		logger.debug('Loaded %s folders and %s files from %s' % (len(self.folders), len(self.files), self.base_dir))

	def __load(self, directory:Path, factory):
		records = []
		for entry in sorted(directory.glob('*.json')):
			try:
				with open(entry, 'r', encoding='utf-8') as f:
					records.append(factory(json.load(f)))
			except (OSError, ValueError, KeyError) as e:
				logger.warning('Skipping unreadable record %s: %s' % (entry, e))
		return records

	def __write(self, path:Path, data:Dict):
		tmp = path.with_suffix('.tmp')
		try:
			with open(tmp, 'w', encoding='utf-8') as f:
				json.dump(data, f, ensure_ascii=False)
			os.replace(tmp, path)
		except (OSError, TypeError, ValueError) as e:
			try:
				tmp.unlink()
			except FileNotFoundError:
				pass
			except OSError as ue:
				logger.warning('Could not remove %s: %s' % (tmp, ue))
			raise DocumentStoreError('Could not write %s' % path) from e

	def _store_folder(self, folder:Folder):
		self.__write(self.folders_dir / ('%s.json' % folder.id), folder.to_dict())

	def _store_file(self, textfile:TextFile):
		self.__write(self.files_dir / ('%s.json' % textfile.id), textfile.to_dict())
