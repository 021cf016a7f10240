import asyncio
from typing import Dict


class UploadStatusBoard:
	"""
	Short lived name -> message entries for a host UI.

	Every entry is removed ttl seconds after it was posted, whether or not
	anyone looked at it. Posting under a name that is still present
	replaces the message and restarts its timer.
	Must be used from the event loop thread.
	"""
	def __init__(self, ttl:float = 3, on_change = None):
		self.ttl = ttl
		self.on_change = on_change
		self.entries:Dict[str, str] = {}
		self.__timers:Dict[str, asyncio.TimerHandle] = {}

	def __contains__(self, name):
		return name in self.entries

	def __len__(self):
		return len(self.entries)

	def __notify(self):
		if self.on_change is not None:
			self.on_change(self.snapshot())

	def post(self, name:str, message:str):
		loop = asyncio.get_running_loop()
		timer = self.__timers.pop(name, None)
		if timer is not None:
			timer.cancel()
		self.entries[name] = message
		self.__timers[name] = loop.call_later(self.ttl, self.__expire, name)
		self.__notify()

	def __expire(self, name:str):
		self.__timers.pop(name, None)
		if self.entries.pop(name, None) is not None:
			self.__notify()

	def get(self, name:str, default = None):
		return self.entries.get(name, default)

	def snapshot(self):
		return dict(self.entries)

	def clear(self):
		for timer in self.__timers.values():
			timer.cancel()
		self.__timers = {}
		self.entries = {}
		self.__notify()
