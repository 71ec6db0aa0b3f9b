TRACE = "trace"
CHUNK = "chunk"
ERROR = "error"
DONE = "done"
