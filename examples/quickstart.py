"""Quickstart example for fakerengine.

This example demonstrates basic usage of fakerengine for fake data generation.

Note: Examples build locale data inline for brevity. Real projects keep it in
YAML files and load it with PathLocaleLoader (see locale_fallback.py).
"""

from fakerengine import FakerError, FakerSession, LetterCase, LocaleTree, SessionConfig

EN = LocaleTree.from_mapping(
    "en",
    {
        "name": {
            "first_name": ["Ada", "Alan", "Grace", "Edsger"],
            "last_name": ["Lovelace", "Turing", "Hopper", "Dijkstra"],
            "name": [
                {"value": "#{first_name} #{last_name}", "weight": 9},
                {"value": "Dr. #{first_name} #{last_name}", "weight": 1},
            ],
        },
        "address": {
            "building_number": ["#{numerify('####')}", "#{numerify('###')}"],
            "street_suffix": ["Street", "Avenue", "Road"],
            "street_name": ["#{Name.last_name} #{street_suffix}"],
            "street_address": ["#{building_number} #{street_name}"],
            "zip_code": ["/[0-9]{5}/"],
        },
    },
)

# Example 1: Directives
print("=" * 50)
print("Example 1: Directives")
print("=" * 50)

session = FakerSession("en", {"en": EN}, seed=42)

print(session.evaluate("#{Name.name}"))
# Output: e.g. Grace Turing

print(session.evaluate("#{Address.streetAddress}, #{Address.zipCode}"))
# Output: e.g. 4821 Hopper Avenue, 30671

# Example 2: Passes
print("\n" + "=" * 50)
print("Example 2: Recursive Expansion")
print("=" * 50)

result = session.expand("#{Address.streetAddress}")
print(f"{result.value!r} took {result.passes} passes")
# street_address -> building_number + street_name -> numerify + last_name + suffix

# Example 3: Reproducibility
print("\n" + "=" * 50)
print("Example 3: Seeds")
print("=" * 50)

first = FakerSession("en", {"en": EN}, seed=7)
second = FakerSession("en", {"en": EN}, seed=7)
print([first.evaluate("#{Name.name}") for _ in range(3)])
print([second.evaluate("#{Name.name}") for _ in range(3)])
# Output: the same three names twice

# Example 4: Pattern fill
print("\n" + "=" * 50)
print("Example 4: numerify / letterify / bothify / regexify")
print("=" * 50)

print(session.numerify("###-###-####"))
print(session.letterify("????", LetterCase.UPPER))
print(session.bothify("??-##"))
print(session.regexify(r"[A-Z]{2}\d{4}-(alpha|beta|rc)"))

upper = FakerSession("en", {"en": EN}, seed=1, config=SessionConfig(letter_case=LetterCase.UPPER))
print(upper.evaluate("#{bothify('???-####')}"))
# Output: e.g. QKD-5521

# Example 5: Errors
print("\n" + "=" * 50)
print("Example 5: Errors")
print("=" * 50)

for template in ("#{Address.nonexistentField}", "#{Address.city", "#{regexify('(a)\\\\1')}"):
    try:
        session.evaluate(template)
    except FakerError as e:
        print(f"{type(e).__name__}:")
        print(e)
        print()
