# ABOUTME: Koboshelf - read-only access to the library database on Kobo e-readers.
# ABOUTME: Package root; the device subpackage holds the public reading API.
