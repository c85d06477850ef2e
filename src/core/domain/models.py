"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edge: a request built from raw strings (library
  reuse, CLI flags) is rejected before any process is spawned.
- The models describe *what* an operation is, not *how* it is executed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Operation(str, Enum):
    """Keyword passed to the tool as its operation argument."""

    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    def label(self) -> str:
        return "Encryption" if self is Operation.ENCRYPT else "Decryption"


class Algorithm(str, Enum):
    """Algorithms accepted by the Secure Properties Tool."""

    BLOWFISH = "Blowfish"
    AES = "AES"
    DES = "DES"
    DESEDE = "DESede"
    RC2 = "RC2"
    RCA = "RCA"

    def label(self) -> str:
        if self is Algorithm.AES:
            return "AES (default in docs)"
        return self.value


class Mode(str, Enum):
    """Block cipher modes accepted by the tool."""

    CBC = "CBC"
    CFB = "CFB"
    ECB = "ECB"
    OFB = "OFB"

    def label(self) -> str:
        if self is Mode.CBC:
            return "CBC (default)"
        return self.value


DEFAULT_ALGORITHM = Algorithm.BLOWFISH
DEFAULT_MODE = Mode.CBC


class OperationRequest(BaseModel):
    """One fully resolved encrypt/decrypt call.

    `use_random_iv` only matters for encryption and `strip_wrapper` only for
    decryption; both are accepted on either kind and ignored where they do not
    apply.
    """

    model_config = ConfigDict(frozen=True)

    operation: Operation
    input_text: str = Field(
        ...,
        min_length=1,
        description="Plain text to encrypt or cipher text to decrypt.",
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Password handed to the tool.",
    )
    algorithm: Algorithm = Field(default=DEFAULT_ALGORITHM)
    mode: Mode = Field(default=DEFAULT_MODE)
    use_random_iv: bool = Field(
        default=False,
        description="Ask the tool for a random IV (encryption only).",
    )
    strip_wrapper: bool = Field(
        default=False,
        description="Remove a `![...]` wrapper before decrypting.",
    )

    @property
    def wants_random_iv(self) -> bool:
        return self.operation is Operation.ENCRYPT and self.use_random_iv


@dataclass
class OperationInput:
    """Raw values as collected by a front-end, before validation.

    The password is optional here; it is resolved against the stored default
    by the pipeline.
    """

    operation: Operation
    input_text: str
    password: str | None = None
    algorithm: str = DEFAULT_ALGORITHM.value
    mode: str = DEFAULT_MODE.value
    use_random_iv: bool = False
    strip_wrapper: bool = True


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    INVALID_INPUT = "invalid_input"
    PASSWORD_MISSING = "password_missing"
    FAILED = "failed"


@dataclass
class OperationOutcome:
    """Result of one pipeline invocation."""

    status: OutcomeStatus
    message: str
    output: str | None = None
    artifact_downloaded: bool = False
    raw_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS
