class Error(Exception): pass
class UnsupportedValueKind(Error, TypeError): pass
class NonStringKey(Error, TypeError): pass
class TimestampOutOfRange(Error, OverflowError): pass
class UnknownTagKind(Error, ValueError): pass
class InvalidTaggedValue(Error, ValueError): pass
