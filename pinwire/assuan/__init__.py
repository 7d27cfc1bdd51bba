"""
Stdio subset of the Assuan protocol, as spoken by pinentry programs.

See https://www.gnupg.org/documentation/manuals/assuan/ for details.
"""
