class NcmError(Exception):
    kind = "NcmError"


class NcmInvalidFormatError(NcmError):
    kind = "InvalidFormat"

    def __init__(self, magic: bytes):
        super().__init__(f"Not an NCM container (magic {magic!r})")
        self.magic = magic


class NcmTruncatedInputError(NcmError):
    kind = "TruncatedInput"

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Unexpected end of input: needed {requested} byte(s), "
            f"{available} available"
        )
        self.requested = requested
        self.available = available


class NcmDecryptionFailedError(NcmError):
    kind = "DecryptionFailed"

    def __init__(self, reason: str):
        super().__init__(f"Block cipher decryption failed: {reason}")


class NcmInvalidKeyMaterialError(NcmError):
    kind = "InvalidKeyMaterial"

    def __init__(self):
        super().__init__("Key block carries no seed material")


class NcmMalformedMetadataError(NcmError):
    kind = "MalformedMetadata"

    def __init__(self, reason: str):
        super().__init__(f"Malformed metadata: {reason}")


class NcmMissingFieldError(NcmError):
    kind = "MissingField"

    def __init__(self, field: str):
        super().__init__(f'Metadata has no "{field}" field')
        self.field = field


class NcmOutputWriteFailedError(NcmError):
    kind = "OutputWriteFailed"

    def __init__(self, output_path, reason: str):
        super().__init__(f'Could not write "{output_path}": {reason}')
        self.output_path = output_path
