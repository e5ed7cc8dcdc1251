"""
Houses the tests for the service layer of the program. This layer is what manages the internal API, and is
what any interface should use to speak through when communicating with the rest of the system.

Asynchronous tests are collected automatically (``asyncio_mode = auto`` in setup.cfg), so they need no marker.
"""
