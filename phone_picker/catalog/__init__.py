"""
phone_picker.catalog — Static catalog loading and validation.

Modules:
  loader — JSON / CSV catalog files → validated ``Item`` lists.
"""
