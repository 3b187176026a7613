"""
Core domain types of the tuyalink library: credentials, device and command
records, and the result type returned by the request dispatcher.
"""
from tuyalink.domain.credentials import Credentials
from tuyalink.domain.device import Command, Device, dump_commands
from tuyalink.domain.results import ApiResult

__all__ = ["ApiResult", "Command", "Credentials", "Device", "dump_commands"]
