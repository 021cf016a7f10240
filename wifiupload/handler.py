import json

from wifiupload import logger
from wifiupload.protocol.http import HTTPRequest, HTTPResponse
from wifiupload.protocol.page import INDEX_HTML_BYTES
from wifiupload.status import UploadStatusBoard
from wifiupload.store import DocumentStore, DocumentStoreError


class UploadAPIHandler:
	"""
	Maps (method, path) to a handler method and runs it.

	Every handler is synchronous and returns an HTTPResponse. The caller is
	responsible for serializing dispatch calls so that a validation read
	on the store and the mutation it guards happen as one step.
	"""
	ROUTES = {
		('GET', '/') : 'serve_page',
		('GET', '/api/folders') : 'list_folders',
		('POST', '/api/createFolder') : 'create_folder',
		('POST', '/api/createFile') : 'create_file',
	}

	def __init__(self, store:DocumentStore = None, status_board:UploadStatusBoard = None):
		self.store = store
		self.status_board = status_board

	def dispatch(self, request:HTTPRequest) -> HTTPResponse:
		if request.method == 'OPTIONS':
			return self.cors_preflight(request)
		func_name = self.ROUTES.get((request.method, request.path))
		if func_name is None:
			return self.not_found(request)
		return getattr(self, func_name)(request)

	@staticmethod
	def parse_json_object(request:HTTPRequest):
		try:
			data = json.loads(request.body)
		except (ValueError, RecursionError):
			return None
		if not isinstance(data, dict):
			return None
		return data

	def __post_status(self, name:str, message:str):
		if self.status_board is not None:
			self.status_board.post(name, message)

	def serve_page(self, request:HTTPRequest):
		return HTTPResponse.html(INDEX_HTML_BYTES)

	def list_folders(self, request:HTTPRequest):
		if self.store is None:
			return HTTPResponse.text(500, '[]')
		try:
			names = self.store.list_folders()
			return HTTPResponse.json(json.dumps(names, ensure_ascii=False))
		except DocumentStoreError as e:
			logger.error('Listing folders failed: %s' % e)
			return HTTPResponse.text(500, '[]')

	def create_folder(self, request:HTTPRequest):
		data = self.parse_json_object(request)
		if data is None:
			return HTTPResponse.text(400, 'Invalid request')
		folder_name = data.get('folderName')
		if not isinstance(folder_name, str) or len(folder_name) == 0:
			return HTTPResponse.text(400, 'Invalid request')

		if self.store is None:
			return HTTPResponse.text(500, 'Server error')

		try:
			if self.store.folder_by_name(folder_name) is not None:
				return HTTPResponse.text(400, 'Folder already exists')
			self.store.add_folder(folder_name)
		except DocumentStoreError as e:
			logger.error('Creating folder %r failed: %s' % (folder_name, e))
			return HTTPResponse.text(500, 'Server error')

		logger.info('Created folder: %s' % folder_name)
		self.__post_status(folder_name, 'Folder created successfully')
		return HTTPResponse.text(200, 'Folder created')

	def create_file(self, request:HTTPRequest):
		data = self.parse_json_object(request)
		if data is None:
			return HTTPResponse.text(400, 'Invalid request')
		file_name = data.get('fileName')
		content = data.get('content')
		if not isinstance(file_name, str) or len(file_name) == 0:
			return HTTPResponse.text(400, 'Invalid request')
		if not isinstance(content, str):
			return HTTPResponse.text(400, 'Invalid request')
		folder_name = data.get('folderName')
		if not isinstance(folder_name, str):
			folder_name = None

		if self.store is None:
			return HTTPResponse.text(500, 'Server error')

		try:
			folder_id = None
			if folder_name:
				folder_id = self.store.folder_by_name(folder_name)
				if folder_id is None:
					return HTTPResponse.text(400, 'Folder not found')
			self.store.add_file(file_name, content, folder_id)
		except DocumentStoreError as e:
			logger.error('Creating file %r failed: %s' % (file_name, e))
			return HTTPResponse.text(500, 'Server error')

		logger.info('Created file: %s' % file_name)
		self.__post_status(file_name, 'File created successfully')
		return HTTPResponse.text(200, 'File created')

	def cors_preflight(self, request:HTTPRequest):
		return HTTPResponse.cors_preflight()

	def not_found(self, request:HTTPRequest):
		return HTTPResponse.text(404, 'Not Found')
