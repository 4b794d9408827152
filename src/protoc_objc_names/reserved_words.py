"""Closed word tables the sanitizer checks generated names against."""

from __future__ import annotations

from typing import FrozenSet

# Segments rendered fully upper case by the case converter.
UPPER_SEGMENTS: FrozenSet[str] = frozenset({"url", "http", "https"})

RESERVED_WORDS: FrozenSet[str] = frozenset({
    # Objective C "keywords" that aren't in C
    "id", "_cmd", "super", "in", "out", "inout", "bycopy", "byref", "oneway",
    "self", "instancetype", "nullable", "nonnull", "nil", "Nil",
    "YES", "NO", "weak",

    # C/C++ keywords (incl. C++11)
    "and", "and_eq", "alignas", "alignof", "asm", "auto", "bitand", "bitor",
    "bool", "break", "case", "catch", "char", "char16_t", "char32_t", "class",
    "compl", "const", "constexpr", "const_cast", "continue", "decltype",
    "default", "delete", "double", "dynamic_cast", "else", "enum", "explicit",
    "export", "extern", "false", "float", "for", "friend", "goto", "if",
    "inline", "int", "long", "mutable", "namespace", "new", "noexcept", "not",
    "not_eq", "nullptr", "operator", "or", "or_eq", "private", "protected",
    "public", "register", "reinterpret_cast", "return", "short", "signed",
    "sizeof", "static", "static_assert", "static_cast", "struct", "switch",
    "template", "this", "thread_local", "throw", "true", "try", "typedef",
    "typeid", "typename", "union", "unsigned", "using", "virtual", "void",
    "volatile", "wchar_t", "while", "xor", "xor_eq",

    # C99
    "restrict",

    # GCC/Clang extension
    "typeof",

    # Not a keyword, but will break you
    "NULL",

    # Often defined as macros by the C library headers
    "stdin", "stdout", "stderr",

    # Objective-C runtime typedefs
    "Category", "Ivar", "Method", "Protocol",

    # GPBMessage instance methods that take no arguments or look like
    # property accessors.
    "clear", "data", "delimitedData", "descriptor", "extensionRegistry",
    "extensionsCurrentlySet", "initialized", "isInitialized", "serializedSize",
    "sortedExtensionsInUse", "unknownFields",

    # MacTypes.h names
    "Fixed", "Fract", "Size", "LogicalAddress", "PhysicalAddress", "ByteCount",
    "ByteOffset", "Duration", "AbsoluteTime", "OptionBits", "ItemCount",
    "PBVersion", "ScriptCode", "LangCode", "RegionCode", "OSType",
    "ProcessSerialNumber", "Point", "Rect", "FixedPoint", "FixedRect", "Style",
    "StyleParameter", "StyleField", "TimeScale", "TimeBase", "TimeRecord",
})

# NSObject methods a generated accessor could accidentally override: the
# zero-argument instance and class methods of NSObject and its categories on
# Apple platforms.
NSOBJECT_METHODS: FrozenSet[str] = frozenset({
    "CAMLType", "CA_copyRenderValue", "CA_prepareRenderValue",
    "NS_copyCGImage", "NS_tiledLayerVisibleRect",
    "___tryRetain_OA", "__autorelease_OA", "__dealloc_zombie", "__release_OA",
    "__retain_OA",
    "_accessibilityFinalize", "_accessibilityIsTableViewDescendant",
    "_accessibilityUIElementSpecifier", "_accessibilityUseConvenienceAPI",
    "_allowsDirectEncoding", "_asScriptTerminologyNameArray",
    "_asScriptTerminologyNameString", "_bindingAdaptor", "_cfTypeID",
    "_copyDescription", "_destroyObserverList", "_didEndKeyValueObserving",
    "_implicitObservationInfo", "_internalAccessibilityAttributedHint",
    "_internalAccessibilityAttributedLabel",
    "_internalAccessibilityAttributedValue", "_isAXConnector",
    "_isAccessibilityContainerSectionCandidate",
    "_isAccessibilityContentNavigatorSectionCandidate",
    "_isAccessibilityContentSectionCandidate",
    "_isAccessibilityTopLevelNavigatorSectionCandidate", "_isDeallocating",
    "_isKVOA", "_isToManyChangeInformation", "_ivarDescription",
    "_localClassNameForClass", "_methodDescription", "_observerStorage",
    "_overrideUseFastBlockObservers", "_propertyDescription",
    "_releaseBindingAdaptor", "_scriptingCount", "_scriptingCountNonrecursively",
    "_scriptingDebugDescription", "_scriptingExists",
    "_scriptingShouldCheckObjectIndexes", "_shortMethodDescription",
    "_shouldSearchChildrenForSection", "_traitStorageList", "_tryRetain",
    "_ui_descriptionBuilder", "_uikit_variesByTraitCollections",
    "_web_description", "_webkit_invokeOnMainThread",
    "_willBeginKeyValueObserving",
    "accessInstanceVariablesDirectly",
    "accessibilityActivate", "accessibilityActivationPoint",
    "accessibilityAllowsOverriddenAttributesWhenIgnored",
    "accessibilityAssistiveTechnologyFocusedIdentifiers",
    "accessibilityAttributedHint", "accessibilityAttributedLabel",
    "accessibilityAttributedValue", "accessibilityContainer",
    "accessibilityContainerType", "accessibilityCustomActions",
    "accessibilityCustomRotors", "accessibilityDecrement",
    "accessibilityDragSourceDescriptors", "accessibilityDropPointDescriptors",
    "accessibilityElementCount", "accessibilityElementDidBecomeFocused",
    "accessibilityElementDidLoseFocus", "accessibilityElementIsFocused",
    "accessibilityElements", "accessibilityElementsHidden",
    "accessibilityFrame", "accessibilityHeaderElements", "accessibilityHint",
    "accessibilityIdentification", "accessibilityIgnoresInvertColors",
    "accessibilityIncrement", "accessibilityLabel", "accessibilityLanguage",
    "accessibilityLocalizedStringKey", "accessibilityNavigationStyle",
    "accessibilityOverriddenAttributes",
    "accessibilityParameterizedAttributeNames", "accessibilityPath",
    "accessibilityPerformEscape", "accessibilityPerformMagicTap",
    "accessibilityPresenterProcessIdentifier", "accessibilityShouldUseUniqueId",
    "accessibilitySupportsNotifications",
    "accessibilitySupportsOverriddenAttributes",
    "accessibilityTemporaryChildren", "accessibilityTextualContext",
    "accessibilityTraits", "accessibilityValue", "accessibilityViewIsModal",
    "accessibilityVisibleArea",
    "allPropertyKeys", "allowsWeakReference", "attributeKeys",
    "autoContentAccessingProxy", "autorelease",
    "automaticallyNotifiesObserversForKey", "awakeFromNib",
    "boolValueSafe", "bs_encoded", "bs_isPlistableType", "bs_secureEncoded",
    "cl_json_serializeKey", "class", "classCode", "classDescription",
    "classFallbacksForKeyedArchiver", "classForArchiver", "classForCoder",
    "classForKeyedArchiver", "classForKeyedUnarchiver", "classForPortCoder",
    "className", "clearProperties", "copy", "dealloc", "debugDescription",
    "defaultAccessibilityTraits", "description", "doubleValueSafe",
    "entityName", "exposedBindings", "finalize", "finishObserving",
    "floatValueSafe", "hash", "init", "initialize", "int64ValueSafe",
    "intValueSafe", "isAccessibilityElement", "isAccessibilityElementByDefault",
    "isElementAccessibilityExposedToInterfaceBuilder", "isFault",
    "isNSArray__", "isNSCFConstantString__", "isNSData__", "isNSDate__",
    "isNSDictionary__", "isNSNumber__", "isNSObject__", "isNSOrderedSet__",
    "isNSSet__", "isNSString__", "isNSTimeZone__", "isNSValue__", "isProxy",
    "keyPathsForValuesAffectingValueForKey", "load", "mutableCopy", "new",
    "objectSpecifier", "observationInfo", "prepareForInterfaceBuilder",
    "release", "releaseOnMainThread", "replacementObjectForCoder", "retain",
    "retainCount", "retainWeakReference", "scriptingProperties", "self",
    "shouldGroupAccessibilityChildren", "storedAccessibilityActivationPoint",
    "storedAccessibilityContainerType", "storedAccessibilityElementsHidden",
    "storedAccessibilityFrame", "storedAccessibilityNavigationStyle",
    "storedAccessibilityTraits", "storedAccessibilityViewIsModal",
    "storedIsAccessibilityElement", "storedShouldGroupAccessibilityChildren",
    "stringValueSafe", "superclass", "toManyRelationshipKeys",
    "toOneRelationshipKeys", "traitStorageList", "unsignedIntValueSafe",
    "unsignedLongLongValueSafe", "zone",
})
