import cattrs

from .grouping import Entry

converter = cattrs.Converter()
# Entries are plain pairs in JSON.
converter.register_unstructure_hook(Entry, lambda e: [e.key, e.value])
