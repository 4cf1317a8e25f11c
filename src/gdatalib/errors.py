"""Exception types raised while parsing and fetching GData documents."""


class GDataError(Exception):
    """Base class for every error raised by gdatalib."""


class ParserError(GDataError):
    """Raised when an XML document cannot be mapped onto the object model."""


class ParsingStringError(ParserError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error parsing XML: {detail}")


class EmptyDocumentError(ParserError):
    def __init__(self) -> None:
        super().__init__("Empty document.")


class UnhandledElementError(ParserError):
    """Raised for a child element the current parse context does not know."""

    def __init__(self, prefix: str | None, name: str, parent: str):
        self.prefix = prefix
        self.name = name
        self.parent = parent
        qualified = f"{prefix}:{name}" if prefix else name
        super().__init__(f"Unhandled <{qualified}> element as a child of <{parent}>.")


class RequiredElementMissingError(ParserError):
    def __init__(self, element: str, parent: str):
        self.element = element
        self.parent = parent
        super().__init__(f"A required <{element}> element as a child of <{parent}> was not present.")


class RequiredPropertyMissingError(ParserError):
    def __init__(self, element: str, property: str):
        self.element = element
        self.property = property
        super().__init__(f"A required @{property} property of a <{element}> was not present.")


class RequiredContentMissingError(ParserError):
    def __init__(self, element: str):
        self.element = element
        super().__init__(f"A <{element}> element was missing required content.")


class DuplicateElementError(ParserError):
    def __init__(self, element: str, parent: str):
        self.element = element
        self.parent = parent
        super().__init__(f"A <{element}> element as a child of <{parent}> was duplicated.")


class ContentError(ParserError):
    """Raised when an element or attribute value has the wrong shape."""


class NotIso8601Error(ContentError):
    def __init__(self, element: str, parent: str, value: str):
        self.element = element
        self.parent = parent
        self.value = value
        super().__init__(f'A <{parent}>\'s <{element}> element content ("{value}") was not in ISO 8601 format.')


class UnknownPropertyValueError(ContentError):
    def __init__(self, element: str, property: str, value: str):
        self.element = element
        self.property = property
        self.value = value
        super().__init__(f'Unknown value "{value}" of a <{element}> @{property} property.')


class InvalidContentError(ContentError):
    def __init__(self, element: str, value: str):
        self.element = element
        self.value = value
        super().__init__(f'The content of a <{element}> element ("{value}") was not valid.')


class ServiceError(GDataError):
    """Raised by the transport when the server answers outside the 2xx range."""

    def __init__(self, status_code: int, uri: str):
        self.status_code = status_code
        self.uri = uri
        super().__init__(f"HTTP {status_code} when querying {uri}")
