"""
Houses the tests for the REST api layer of the program.

The tests run the views against a real (in-memory) database and assert
that the formatting of the responses remains stable, and that the system
answers with the expected status when interacted with incorrectly.
"""
