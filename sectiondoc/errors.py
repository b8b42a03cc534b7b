"""Exceptions raised by sectiondoc"""


class SectionDocError(Exception):
    """Base class for sectiondoc errors"""
    pass


class UnsupportedLanguageError(SectionDocError, LookupError):
    """No language rules are registered for a file"""
    pass


class StructuredCommentError(SectionDocError, ValueError):
    """A doc comment block could not be parsed"""
    pass


class HighlighterError(SectionDocError):
    """The external highlighter could not be run"""
    def __init__(self, message: str, stderr: str = ""):
        self.message = message
        self.stderr = stderr
        super().__init__(message)
