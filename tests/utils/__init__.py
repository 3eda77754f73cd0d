from .sockets import FakeHandle, FakeBinding, settle, wire_message, wire_control

__all__ = ["FakeBinding", "FakeHandle", "settle", "wire_control", "wire_message"]
