from nameutils.names import (
    AttachedPrefix,
    CaseExceptionRegistry,
    FamilyOnly,
    FamilyWithGiven,
    FullName,
    KeyNormalizer,
    NameUtils,
    NameToken,
    NameUtilsConfig,
    ParticleRule,
    ParticleTable,
    RegistryInfo,
    SplitExceptionRegistry,
    SplitResult,
    clear_exceptions,
    fnamecase,
    get_registry_info,
    gnamecase,
    namecase,
    namecase_exception,
    namejoin,
    nameparts,
    namesplit,
    namesplit_exception,
    nametrim,
    normalize,
)

__all__ = [
    "AttachedPrefix",
    "CaseExceptionRegistry",
    "FamilyOnly",
    "FamilyWithGiven",
    "FullName",
    "KeyNormalizer",
    "NameUtils",
    "NameToken",
    "NameUtilsConfig",
    "ParticleRule",
    "ParticleTable",
    "RegistryInfo",
    "SplitExceptionRegistry",
    "SplitResult",
    "clear_exceptions",
    "fnamecase",
    "get_registry_info",
    "gnamecase",
    "namecase",
    "namecase_exception",
    "namejoin",
    "nameparts",
    "namesplit",
    "namesplit_exception",
    "nametrim",
    "normalize",
]
