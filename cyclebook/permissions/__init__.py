"""
.. autoclasstree:: cyclebook.permissions

This module contains the various permission types. A permission is essentially
just an object (either function or class) that can be called asynchronously
and raises a RoutePermissionError in the case of a failed permission.
"""

from cyclebook.permissions.decorators import requires
from cyclebook.permissions.permission import Permission, RoutePermissionError
from cyclebook.permissions.users import ValidToken, HasRole
