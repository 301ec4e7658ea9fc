from .aob import PatternElement, SignatureParseError, WILDCARD
from .signature_scanner import Signature

__all__ = ['PatternElement', 'Signature', 'SignatureParseError', 'WILDCARD']
