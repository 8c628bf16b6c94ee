"""Pure helpers: legacy path parsing, transformation recognition,
gallery settings normalization, and the write-once memo cell."""
