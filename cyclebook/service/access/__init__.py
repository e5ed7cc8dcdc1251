"""
Data access functions for the models. These are thin wrappers over
the ORM that the managers and views share.
"""
