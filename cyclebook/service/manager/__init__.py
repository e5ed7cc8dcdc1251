"""
The managers hold the in-process state of the server and
coordinate the changes that span more than one model.
"""
