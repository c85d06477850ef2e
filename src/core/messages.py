"""User-facing strings shared by the pipeline and the CLI."""

from __future__ import annotations

REQUIRED_INPUT = "Input text is required."
JAR_DOWNLOAD_FAILED = "Failed to download the encryption tool JAR file."
PASSWORD_NOT_SET = "No password provided. Please enter a password or set a default in preferences."

JAR_DOWNLOADED = "secure-properties-tool.jar has been downloaded successfully."
ENCRYPT_SUCCESS = "Successfully encrypted and copied to clipboard:"
DECRYPT_SUCCESS = "Successfully decrypted and copied to clipboard:"

ENCRYPT_DONE = "Successfully encrypted:"
DECRYPT_DONE = "Successfully decrypted:"
CLIPBOARD_UNAVAILABLE = "Clipboard unavailable; copy the result below."
