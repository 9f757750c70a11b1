ERRORS = {
  "E_HEADER_SHORT": "Buffer too short for the container header",
  "E_HEADER_MAGIC": "Container header missing XDBF magic",
  "E_DIRECTORY_TRUNCATED": "Directory slots run past the end of the buffer",
  "E_BLOCK_TRUNCATED": "Entry content runs past the end of the buffer",
  "E_XSTR_HEADER": "String table header short, bad magic or bad version",
  "E_XSTR_TRUNCATED": "String table records run past the end of the block",
  "E_XACH_HEADER": "Achievements header short, bad magic or bad version",
  "E_XACH_TRUNCATED": "Achievement records run past the end of the block",
  "E_XSTC_HEADER": "Locale block short or missing XSTC magic",
}
