"""
Vocabulary tables — subtypes, families, statuses, message levels, datatypes.

Every item element in a system-characteristics document is typed by a
(namespace, local-name) pair. The namespace is derived from the subtype's
family and the local name from its canonical token, so both directions
(parse and serialize) are served from one table built at import time.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel


SYSCHAR_NAMESPACE = "http://oval.mitre.org/XMLSchema/oval-system-characteristics-5"
ITEM_SUFFIX = "_item"


class SyscharError(Exception):
    """Base class for system-characteristics errors."""
    pass


class VocabularyError(SyscharError):
    """Raised when the subtype table is incomplete or ambiguous."""
    pass


class _ParsableEnum(str, Enum):
    """str Enum whose wire text is its value."""

    @classmethod
    def parse(cls, text: Optional[str], default):
        """Map attribute text to a member; absent or unknown text gives default."""
        if text is None:
            return default
        try:
            return cls(text)
        except ValueError:
            return cls._aliases().get(text, default)

    @classmethod
    def _aliases(cls) -> dict:
        return {}

    @property
    def text(self) -> str:
        return self.value


class Family(_ParsableEnum):
    INDEPENDENT = "independent"
    UNIX = "unix"
    LINUX = "linux"
    WINDOWS = "windows"
    MACOS = "macos"
    SOLARIS = "solaris"


class Subtype(str, Enum):
    """What kind of real-world object an item describes."""
    UNKNOWN = "unknown"

    # independent
    ENVIRONMENT_VARIABLE = "independent:environmentvariable"
    ENVIRONMENT_VARIABLE58 = "independent:environmentvariable58"
    FAMILY = "independent:family"
    FILE_HASH = "independent:filehash"
    FILE_HASH58 = "independent:filehash58"
    LDAP = "independent:ldap"
    SQL = "independent:sql"
    SQL57 = "independent:sql57"
    TEXT_FILE_CONTENT = "independent:textfilecontent"
    TEXT_FILE_CONTENT54 = "independent:textfilecontent54"
    VARIABLE = "independent:variable"
    XML_FILE_CONTENT = "independent:xmlfilecontent"

    # unix
    UNIX_FILE = "unix:file"
    UNIX_INETD = "unix:inetd"
    UNIX_INTERFACE = "unix:interface"
    UNIX_PASSWORD = "unix:password"
    UNIX_PROCESS = "unix:process"
    UNIX_PROCESS58 = "unix:process58"
    UNIX_RUNLEVEL = "unix:runlevel"
    UNIX_SHADOW = "unix:shadow"
    UNIX_SYMLINK = "unix:symlink"
    UNIX_SYSCTL = "unix:sysctl"
    UNIX_UNAME = "unix:uname"
    UNIX_XINETD = "unix:xinetd"

    # linux
    LINUX_DPKG_INFO = "linux:dpkginfo"
    LINUX_INET_LISTENING_SERVERS = "linux:inetlisteningservers"
    LINUX_PARTITION = "linux:partition"
    LINUX_RPM_INFO = "linux:rpminfo"
    LINUX_RPM_VERIFY = "linux:rpmverify"
    LINUX_SELINUX_BOOLEAN = "linux:selinuxboolean"
    LINUX_SELINUX_SECURITY_CONTEXT = "linux:selinuxsecuritycontext"

    # windows
    WINDOWS_FILE = "windows:file"
    WINDOWS_GROUP = "windows:group"
    WINDOWS_REGISTRY = "windows:registry"
    WINDOWS_SERVICE = "windows:service"
    WINDOWS_USER = "windows:user"
    WINDOWS_WMI57 = "windows:wmi57"

    # macos
    MACOS_PLIST = "macos:plist"
    MACOS_PWPOLICY = "macos:pwpolicy"

    # solaris
    SOLARIS_ISAINFO = "solaris:isainfo"
    SOLARIS_PACKAGE = "solaris:package"


class SyscharStatus(_ParsableEnum):
    """
    Collection outcome for an item or entry.

    Written with the OVAL schema spelling ("does not exist"); the hyphenated
    forms ("does-not-exist") are read as aliases.
    """
    EXISTS = "exists"
    DOES_NOT_EXIST = "does not exist"
    ERROR = "error"
    NOT_COLLECTED = "not collected"
    NOT_APPLICABLE = "not applicable"
    UNKNOWN = "unknown"

    @classmethod
    def _aliases(cls) -> dict:
        return {
            "does-not-exist": cls.DOES_NOT_EXIST,
            "not-collected": cls.NOT_COLLECTED,
            "not-applicable": cls.NOT_APPLICABLE,
        }


class MessageLevel(_ParsableEnum):
    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class Datatype(_ParsableEnum):
    """OVAL simple datatypes carried by entries."""
    UNKNOWN = "unknown"  # never written; marks an unrecognised datatype attribute
    BINARY = "binary"
    BOOLEAN = "boolean"
    DEBIAN_EVR_STRING = "debian_evr_string"
    EVR_STRING = "evr_string"
    FILESET_REVISION = "fileset_revision"
    FLOAT = "float"
    INT = "int"
    IOS_VERSION = "ios_version"
    IPV4_ADDRESS = "ipv4_address"
    IPV6_ADDRESS = "ipv6_address"
    STRING = "string"
    VERSION = "version"

    @classmethod
    def parse(cls, text: Optional[str], default):
        if text is None:
            return default
        if text == cls.UNKNOWN.value:
            return cls.UNKNOWN
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


class ItemTag(BaseModel, frozen=True):
    """Serialization identity of a subtype."""

    family: Family
    token: str                              # canonical subtype text, e.g. "file"
    namespace: str                          # SYSCHAR_NAMESPACE#family
    local_name: str                         # token + "_item"


# Subtype → (family, canonical token). Written out explicitly; the enum values
# above are identifiers only and are never split apart.
_SUBTYPE_DEFINITIONS: Dict[Subtype, Tuple[Family, str]] = {
    Subtype.ENVIRONMENT_VARIABLE: (Family.INDEPENDENT, "environmentvariable"),
    Subtype.ENVIRONMENT_VARIABLE58: (Family.INDEPENDENT, "environmentvariable58"),
    Subtype.FAMILY: (Family.INDEPENDENT, "family"),
    Subtype.FILE_HASH: (Family.INDEPENDENT, "filehash"),
    Subtype.FILE_HASH58: (Family.INDEPENDENT, "filehash58"),
    Subtype.LDAP: (Family.INDEPENDENT, "ldap"),
    Subtype.SQL: (Family.INDEPENDENT, "sql"),
    Subtype.SQL57: (Family.INDEPENDENT, "sql57"),
    Subtype.TEXT_FILE_CONTENT: (Family.INDEPENDENT, "textfilecontent"),
    Subtype.TEXT_FILE_CONTENT54: (Family.INDEPENDENT, "textfilecontent54"),
    Subtype.VARIABLE: (Family.INDEPENDENT, "variable"),
    Subtype.XML_FILE_CONTENT: (Family.INDEPENDENT, "xmlfilecontent"),
    Subtype.UNIX_FILE: (Family.UNIX, "file"),
    Subtype.UNIX_INETD: (Family.UNIX, "inetd"),
    Subtype.UNIX_INTERFACE: (Family.UNIX, "interface"),
    Subtype.UNIX_PASSWORD: (Family.UNIX, "password"),
    Subtype.UNIX_PROCESS: (Family.UNIX, "process"),
    Subtype.UNIX_PROCESS58: (Family.UNIX, "process58"),
    Subtype.UNIX_RUNLEVEL: (Family.UNIX, "runlevel"),
    Subtype.UNIX_SHADOW: (Family.UNIX, "shadow"),
    Subtype.UNIX_SYMLINK: (Family.UNIX, "symlink"),
    Subtype.UNIX_SYSCTL: (Family.UNIX, "sysctl"),
    Subtype.UNIX_UNAME: (Family.UNIX, "uname"),
    Subtype.UNIX_XINETD: (Family.UNIX, "xinetd"),
    Subtype.LINUX_DPKG_INFO: (Family.LINUX, "dpkginfo"),
    Subtype.LINUX_INET_LISTENING_SERVERS: (Family.LINUX, "inetlisteningservers"),
    Subtype.LINUX_PARTITION: (Family.LINUX, "partition"),
    Subtype.LINUX_RPM_INFO: (Family.LINUX, "rpminfo"),
    Subtype.LINUX_RPM_VERIFY: (Family.LINUX, "rpmverify"),
    Subtype.LINUX_SELINUX_BOOLEAN: (Family.LINUX, "selinuxboolean"),
    Subtype.LINUX_SELINUX_SECURITY_CONTEXT: (Family.LINUX, "selinuxsecuritycontext"),
    Subtype.WINDOWS_FILE: (Family.WINDOWS, "file"),
    Subtype.WINDOWS_GROUP: (Family.WINDOWS, "group"),
    Subtype.WINDOWS_REGISTRY: (Family.WINDOWS, "registry"),
    Subtype.WINDOWS_SERVICE: (Family.WINDOWS, "service"),
    Subtype.WINDOWS_USER: (Family.WINDOWS, "user"),
    Subtype.WINDOWS_WMI57: (Family.WINDOWS, "wmi57"),
    Subtype.MACOS_PLIST: (Family.MACOS, "plist"),
    Subtype.MACOS_PWPOLICY: (Family.MACOS, "pwpolicy"),
    Subtype.SOLARIS_ISAINFO: (Family.SOLARIS, "isainfo"),
    Subtype.SOLARIS_PACKAGE: (Family.SOLARIS, "package"),
}


def family_namespace(family: Family) -> str:
    return f"{SYSCHAR_NAMESPACE}#{family.value}"


def build_tag_tables(
    definitions: Dict[Subtype, Tuple[Family, str]],
) -> Tuple[Dict[Subtype, ItemTag], Dict[Tuple[str, str], Subtype]]:
    """
    Build the forward (subtype → tag) and reverse ((ns, local) → subtype) tables.

    Raises VocabularyError if any known subtype lacks a definition, if
    UNKNOWN is given one, or if two subtypes would serialize to the same tag.
    """
    if Subtype.UNKNOWN in definitions:
        raise VocabularyError("Subtype.UNKNOWN must not have a serialization tag")

    missing = [s.name for s in Subtype if s is not Subtype.UNKNOWN and s not in definitions]
    if missing:
        raise VocabularyError(f"No tag definition for subtypes: {', '.join(missing)}")

    forward: Dict[Subtype, ItemTag] = {}
    reverse: Dict[Tuple[str, str], Subtype] = {}
    for subtype, (family, token) in definitions.items():
        tag = ItemTag(
            family=family,
            token=token,
            namespace=family_namespace(family),
            local_name=token + ITEM_SUFFIX,
        )
        key = (tag.namespace, tag.local_name)
        if key in reverse:
            raise VocabularyError(
                f"{subtype.name} and {reverse[key].name} both map to "
                f"{{{tag.namespace}}}{tag.local_name}"
            )
        forward[subtype] = tag
        reverse[key] = subtype
    return forward, reverse


_ITEM_TAGS, _SUBTYPES_BY_TAG = build_tag_tables(_SUBTYPE_DEFINITIONS)


def item_tag(subtype: Subtype) -> ItemTag:
    """Namespace and element name for a known subtype."""
    if subtype is Subtype.UNKNOWN:
        raise VocabularyError("Subtype.UNKNOWN has no serialization tag")
    return _ITEM_TAGS[subtype]


def subtype_from_tag(namespace: Optional[str], local_name: str) -> Subtype:
    """Resolve an item element's (namespace, local name); UNKNOWN if unrecognised."""
    return _SUBTYPES_BY_TAG.get((namespace or "", local_name), Subtype.UNKNOWN)


def family_of(subtype: Subtype) -> Optional[Family]:
    tag = _ITEM_TAGS.get(subtype)
    return tag.family if tag else None


def text_of(subtype: Subtype) -> str:
    tag = _ITEM_TAGS.get(subtype)
    return tag.token if tag else Subtype.UNKNOWN.value


def namespace_prefixes() -> Dict[str, str]:
    """Conventional prefixes for the syschar namespace and each family namespace."""
    prefixes = {SYSCHAR_NAMESPACE: "oval-sc"}
    for family in Family:
        prefixes[family_namespace(family)] = f"{family.value}-sc"
    return prefixes
