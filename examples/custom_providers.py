"""Custom Providers Example - Python Code Behind Directives.

This example shows how to extend fakerengine with providers for values that
cannot be expressed as a list of strings:

1. Check digits (a Luhn-valid card number)
2. Providers with arguments
3. Providers that evaluate templates themselves
4. Global providers callable without a category

Providers receive the session first, then the directive's arguments. They
must draw randomness from the session so that seeded output stays
reproducible.

Python 3.13+.
"""

from __future__ import annotations

from fakerengine import FakerSession, LocaleTree

TREES = {
    "en": LocaleTree.from_mapping(
        "en",
        {
            "name": {"first_name": ["Ada", "Alan"], "last_name": ["Lovelace", "Turing"]},
            "company": {"suffix": ["Inc.", "LLC", "Group"]},
            "finance": {"card_owner": ["#{Name.first_name} #{Name.last_name}"]},
        },
    )
}


# Example 1: Check digits
def luhn_number(session: FakerSession, length: int = 16) -> str:
    """Card-like number whose last digit satisfies the Luhn check."""
    body = session.numerify("#" * (length - 1))
    total = 0
    for index, ch in enumerate(reversed(body)):
        digit = int(ch)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return body + str((10 - total % 10) % 10)


# Example 2: Arguments
def amount(session: FakerSession, low: int, high: int, currency: str = "USD") -> str:
    """Amount between low and high, in whole units."""
    return f"{session.random_source.next_int_between(low, high)} {currency}"


# Example 3: Re-entrant evaluation
def company_name(session: FakerSession) -> str:
    """Company named after a person."""
    return session.evaluate("#{Name.last_name} #{Company.suffix}")


# Example 4: Global provider
def initials(session: FakerSession) -> str:
    """Two upper-case letters and a dot each."""
    return ".".join(session.letterify("??", "upper")) + "."


def main() -> None:
    """Register the providers and use them from templates."""
    session = FakerSession("en", TREES, seed=2024)
    session.add_provider(luhn_number, category="Finance", method="card_number")
    session.add_provider(amount, category="Finance")
    session.add_provider(company_name, category="Company", method="name")
    session.add_provider(initials)

    print("=" * 60)
    print("Custom providers")
    print("=" * 60)
    print(session.evaluate("#{Finance.cardOwner}: #{Finance.cardNumber}"))
    print(session.evaluate("#{Finance.amount(10, 500)} / #{Finance.amount(1, 9, 'EUR')}"))
    print(session.evaluate("#{Company.name}"))
    print(session.evaluate("Signed: #{initials}"))
    print(f"Registered: {sorted(session.providers)}")


if __name__ == "__main__":
    main()
