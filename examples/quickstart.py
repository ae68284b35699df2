"""Quickstart example for j18s.

This example demonstrates string translation, plural rules, placeholder
arguments and bound elements that re-render on a language switch.

Note: Examples use the in-memory Element adapter. Real hosts only need a
``content`` attribute plus a ``dataset`` mapping or get/set/remove_attribute.
"""

import logging

from j18s import InvalidPluralRuleError, TranslationEngine
from j18s.binding import AttributeElement, Element, ElementCollection, ElementTranslator

logging.basicConfig(level=logging.WARNING)

# Example 1: Simple translation
print("=" * 50)
print("Example 1: Simple Translation")
print("=" * 50)

engine = TranslationEngine("et")
engine.register_language(
    "et",
    {
        "default": {
            "Hello, World!": "Tere, maailm!",
            "%d file": ["%d fail", "%d faili"],
            "%s has %d messages": "%s-l on %d sõnumit",
        },
        "menu": {"File": "Fail"},
    },
)

print(engine.translate("Hello, World!"))
# Output: Tere, maailm!

print(engine.translate("Not translated yet"))
# Output: Not translated yet

# Example 2: Contexts
print("\n" + "=" * 50)
print("Example 2: Contexts")
print("=" * 50)

print(engine.translate("File", context="menu"))
# Output: Fail

# Example 3: Plurals and arguments
print("\n" + "=" * 50)
print("Example 3: Plurals and Arguments")
print("=" * 50)

for count in (1, 2):
    print(engine.translate_plural("%d file", "%d files", count, count))
# Output: 1 fail
# Output: 2 faili

print(engine.translate("%s has %d messages", args=["Ann", 5]))
# Output: Ann-l on 5 sõnumit

# Example 4: Languages with more than two forms
print("\n" + "=" * 50)
print("Example 4: Polish Plural Rule")
print("=" * 50)

engine.register_language(
    "pl",
    {"default": {"%d file": ["%d plik", "%d pliki", "%d plików"]}},
    "nplurals=3; plural=n==1 ? 0 : n%10>=2 && n%10<=4 && (n%100<10 || n%100>=20) ? 1 : 2",
)
for count in (1, 3, 5, 22):
    print(engine.translate("%d file", plural_count=count, language="pl", args=[count]))
# Output: 1 plik
# Output: 3 pliki
# Output: 5 plików
# Output: 22 pliki

try:
    engine.register_language("xx", {}, "nplurals=2; plural=n !!= 1")
except InvalidPluralRuleError as error:
    print(error)
# Output: error[INVALID_PLURAL_RULE]: Invalid plural rule: unexpected '!'
#           --> nplurals=2; plural=n !!= 1
#                                   ^
#           = help: Use the gettext form: nplurals=N; plural=<C expression over n>

# Example 5: Bound elements
print("\n" + "=" * 50)
print("Example 5: Bound Elements")
print("=" * 50)

engine = TranslationEngine("en")
engine.register_language("et", {"default": {"Hello": "Tere", "%d cat": ["%d kass", "%d kassi"]}})

document = ElementCollection()
translator = ElementTranslator(engine, document.marked)

title = document.add(Element("Hello"))
counter = document.add(Element("%d cat"))
translator.create_translation_element(title)
translator.create_translation_element(counter, plural="%d cats", plural_count=3, text_args=[3])
print(title.content, "|", counter.content)
# Output: Hello | 3 cats

engine.set_active_language("et")
print(title.content, "|", counter.content)
# Output: Tere | 3 kassi

translator.update_plural(counter, None, 1, 1)
print(counter.content)
# Output: 1 kass

# Example 6: Flat string attributes
print("\n" + "=" * 50)
print("Example 6: Attribute Metadata")
print("=" * 50)

document = ElementCollection()
flat = ElementTranslator(engine, document.marked)
label = document.add(AttributeElement("%d cat"))
flat.create_translation_element(label, plural_count=2, text_args=[2])
print(label.content, label.attributes["data-j18s-plural-count"])
# Output: 2 kassi 2

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
