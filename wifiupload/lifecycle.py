
class HostLifecycle:
	"""
	Hooks into the application hosting the server.

	When the host is about to be suspended the server asks for permission
	to keep running for a while. The returned token is opaque, it is only
	ever handed back to end_background_task. The host calls
	expiration_handler when the granted time is up.
	The default implementation grants nothing.
	"""
	def begin_background_task(self, expiration_handler):
		return None

	def end_background_task(self, token):
		return
