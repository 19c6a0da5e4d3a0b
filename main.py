"""
main.py - Demo of persisted observable properties.
"""

from typing import Annotated, Optional

from pydantic import BaseModel

from observable_default import Defaults, Observable, track, user_default


class Contact(BaseModel):
    email: str


# Named suite used through the `.shared` shorthand
Defaults.shared = Defaults.suite("SHARED")


class Person(Observable):
    name: Annotated[Optional[str], user_default]
    age: Annotated[int, user_default(store=".shared")] = 0
    non_optional: Annotated[str, user_default] = ""
    contact_optional: Annotated[Optional[Contact], user_default]
    contact: Annotated[Contact, user_default] = Contact(email="")


def main():
    """Main entry point."""
    print("observable-default - Persisted Properties")
    print("=" * 40)

    for name, fragments in Person.accessor_fragments().items():
        print(f"\n# {name} (key={fragments.key}, store={fragments.store})")
        print(fragments.source)

    person = Person()
    person.observe(lambda subject, name: print(f"  changed: {name}"))

    _, read = track(lambda: (person.name, person.age))
    print(f"Tracked reads: {sorted(read)}")

    person.name = "Ada"
    person.age = 36
    person.contact = Contact(email="ada@example.com")

    # A fresh instance sees the stored values
    other = Person()
    print(f"\nname={other.name!r} age={other.age!r} contact={other.contact!r}")
    print(f"contact_optional={other.contact_optional!r}")


if __name__ == "__main__":
    main()
