"""Pure domain code: documents, ids, tokens, passwords, errors.

Nothing here imports FastAPI, so it is unit-tested directly and shared with
the seed tool.
"""