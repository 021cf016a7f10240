from wifiupload.common.packetizers import Packetizer

HEADER_TERMINATOR = b'\r\n\r\n'
BODYLESS_METHODS = [b'GET', b'OPTIONS']


class RequestTooLarge(Exception):
	def __init__(self, size:int, limit:int):
		self.size = size
		self.limit = limit
		super().__init__('Request exceeds %s bytes (got %s so far)' % (limit, size))


class RequestFramer(Packetizer):
	"""
	Reassembles exactly one HTTP request from arbitrarily sized chunks.

	data_in is fed every chunk read from the transport and None once the
	transport reports end of stream. It yields the raw request bytes
	(headers and body) a single time, as soon as the request is complete:

	- GET and OPTIONS without Content-Length are complete once the header
	  terminator is seen
	- anything carrying Content-Length is complete once that many body
	  bytes followed the header terminator
	- otherwise the request waits for end of stream, at which point any
	  buffered bytes are handed over as they are

	Chunks arriving after completion are ignored.
	"""
	def __init__(self, buffer_size = 65536, max_request_size = 16*1024*1024):
		Packetizer.__init__(self, buffer_size)
		self.max_request_size = max_request_size
		self.buffer = bytearray()
		self.scan_offset = 0
		self.header_end:int = None
		self.content_length:int = None
		self.method:bytes = None
		self.processed = False

	@property
	def headers_parsed(self):
		return self.header_end is not None

	def __parse_headers(self):
		# only the tail that may hold a new terminator is searched
		marker = self.buffer.find(HEADER_TERMINATOR, self.scan_offset)
		if marker == -1:
			self.scan_offset = max(0, len(self.buffer) - len(HEADER_TERMINATOR) + 1)
			return
		self.header_end = marker + len(HEADER_TERMINATOR)
		lines = bytes(self.buffer[:marker]).split(b'\r\n')
		request_line = lines[0].split(b' ')
		self.method = request_line[0]
		for line in lines[1:]:
			if line.lower().startswith(b'content-length:') is False:
				continue
			try:
				self.content_length = int(line.split(b':', 1)[1].strip())
			except ValueError:
				continue
			if self.content_length < 0:
				self.content_length = None
				continue
			break

	def __is_complete(self):
		if self.header_end is None:
			return False
		if self.content_length is None:
			return self.method in BODYLESS_METHODS
		return len(self.buffer) - self.header_end >= self.content_length

	def __frame(self):
		self.processed = True
		if self.content_length is not None:
			return bytes(self.buffer[:self.header_end + self.content_length])
		return bytes(self.buffer)

	async def data_in(self, data):
		if self.processed is True:
			return

		if data is None:
			# end of stream, hand over whatever arrived
			if len(self.buffer) > 0:
				yield self.__frame()
			return

		self.buffer.extend(data)
		if len(self.buffer) > self.max_request_size:
			self.processed = True
			raise RequestTooLarge(len(self.buffer), self.max_request_size)

		if self.header_end is None:
			self.__parse_headers()

		if self.__is_complete() is True:
			yield self.__frame()
