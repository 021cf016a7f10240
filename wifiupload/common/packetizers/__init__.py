
class Packetizer:
	"""Passes every received chunk through unchanged."""
	def __init__(self, buffer_size = 65536):
		self.buffer_size = buffer_size

	async def data_out(self, data):
		yield data

	async def data_in(self, data):
		# None signals end of stream, nothing is buffered here
		if data is None:
			return
		yield data
