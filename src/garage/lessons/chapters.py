"""Sui Garage lesson chapters.

Chapters are immutable records in teaching order; each carries its own
validator. Together they build up the ``sui_garage::car_factory`` module.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from garage.lessons.validation import (
    ChapterValidator,
    Requirement,
    Validator,
    VerdictResult,
    contains,
    starts_with,
)

MODULE_NAME = "sui_garage::car_factory"


@dataclass(frozen=True)
class Chapter:
    """One lesson step: instructions, starter buffer, solution, and checker."""

    id: int
    title: str
    content: str
    initial_code: str
    expected_code: str
    validate: Validator
    filename: str = "car_factory.move"

    def check(self, code: str) -> VerdictResult:
        return self.validate(code)

    def summary(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "filename": self.filename}


def _module_requirement(default_line: int) -> Requirement:
    return Requirement(
        snippet=f"module {MODULE_NAME}",
        message=f'module name should be "{MODULE_NAME}"',
        anchor=starts_with("module"),
        default_line=default_line,
    )


# ---------------------------------------------------------------------------
# Chapter 1: modules and imports
# ---------------------------------------------------------------------------

CHASSIS_INITIAL = """// Start your engine here!
module sui_garage::car_factory {

    // Your code here

}"""

CHASSIS_EXPECTED = """module sui_garage::car_factory {
    use std::string::{String};
}"""

CHASSIS_CONTENT = """\
## Chapter 1: Building the Chassis (Modules & Move Basics)

Welcome, Mechanic! Before we add the engine or the nitro, we need a place to
work. In Move, code is organized into **modules**: a module is your workshop,
holding the data structures (cars, parts) and the functions (tuning, painting)
that act on them.

Sui is **object-centric**: everything you build here, from a rusty sedan to a
supersonic race car, is an object that lives in a user's wallet.

### Key concepts

- **The module** is declared with `module address::name`.
- **The package** is a collection of modules named in `Move.toml`.
- **Imports** use the `use` keyword to bring in standard libraries, such as
  `string` for naming our cars.

### Put it to the test

1. Create a module named `car_factory` inside the address `sui_garage`.
2. Inside the module, import the String type: `use std::string::{String};`
"""

_USE_STRING = Requirement(
    snippet="use std::string::{String}",
    message='missing import statement "use std::string::{String};"',
    anchor=contains("use", "// Your code here"),
    default_line=4,
)

CHASSIS = Chapter(
    id=1,
    title="Building the Chassis",
    content=CHASSIS_CONTENT,
    initial_code=CHASSIS_INITIAL,
    expected_code=CHASSIS_EXPECTED,
    validate=ChapterValidator(
        expected_code=CHASSIS_EXPECTED,
        requirements=(_module_requirement(2), _USE_STRING),
    ),
)


# ---------------------------------------------------------------------------
# Chapter 2: the Car struct
# ---------------------------------------------------------------------------

BLUEPRINT_INITIAL = """module sui_garage::car_factory {
    use std::string::{String};

    // TODO: define the Car struct with an id, a name and a speed

}"""

BLUEPRINT_EXPECTED = """module sui_garage::car_factory {
    use std::string::{String};

    public struct Car has key, store {
        id: UID,
        name: String,
        speed: u64,
    }
}"""

BLUEPRINT_CONTENT = """\
## Chapter 2: The Car Blueprint (Structs & Abilities)

Every car that rolls out of the garage starts as a blueprint. In Move, a
blueprint is a **struct**. Abilities decide what the struct is allowed to do:

- `key` makes it a Sui object that can be owned. A `key` struct must have an
  `id: UID` as its first field.
- `store` lets it be transferred freely and kept inside other objects.

### Put it to the test

Declare `public struct Car has key, store` with three fields:
`id: UID`, `name: String` and `speed: u64`.
"""

BLUEPRINT = Chapter(
    id=2,
    title="The Car Blueprint",
    content=BLUEPRINT_CONTENT,
    initial_code=BLUEPRINT_INITIAL,
    expected_code=BLUEPRINT_EXPECTED,
    validate=ChapterValidator(
        expected_code=BLUEPRINT_EXPECTED,
        requirements=(
            _module_requirement(1),
            Requirement(
                snippet="use std::string::{String}",
                message='missing import statement "use std::string::{String};"',
                anchor=contains("use"),
                default_line=2,
            ),
            Requirement(
                snippet="public struct Car",
                message='missing struct declaration "public struct Car"',
                anchor=contains("struct", "// TODO"),
                default_line=4,
            ),
            Requirement(
                snippet="has key, store",
                message='Car needs the "key" and "store" abilities: "has key, store"',
                anchor=contains("struct Car", "// TODO"),
                default_line=4,
            ),
            Requirement(
                snippet="id: UID",
                message='missing field "id: UID" (every object needs a UID)',
                anchor=contains("id:", "struct Car", "// TODO"),
                default_line=5,
            ),
            Requirement(
                snippet="name: String",
                message='missing field "name: String"',
                anchor=contains("name:", "struct Car", "// TODO"),
                default_line=6,
            ),
            Requirement(
                snippet="speed: u64",
                message='missing field "speed: u64"',
                anchor=contains("speed:", "struct Car", "// TODO"),
                default_line=7,
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Chapter 3: the constructor
# ---------------------------------------------------------------------------

ASSEMBLY_INITIAL = """module sui_garage::car_factory {
    use std::string::{String};

    public struct Car has key, store {
        id: UID,
        name: String,
        speed: u64,
    }

    // TODO: write new_car, which builds a Car from a name and a speed

}"""

ASSEMBLY_EXPECTED = """module sui_garage::car_factory {
    use std::string::{String};

    public struct Car has key, store {
        id: UID,
        name: String,
        speed: u64,
    }

    public fun new_car(name: String, speed: u64, ctx: &mut TxContext): Car {
        Car {
            id: object::new(ctx),
            name,
            speed,
        }
    }
}"""

ASSEMBLY_CONTENT = """\
## Chapter 3: The Assembly Line (Functions & Object IDs)

A blueprint alone does not drive. We need an assembly line: a function that
takes a name and a top speed and hands back a brand new `Car`.

Objects need a globally unique id, and only the transaction context can mint
one. Take `ctx: &mut TxContext` as the last parameter and create the id with
`object::new(ctx)`.

### Put it to the test

Write `public fun new_car(name: String, speed: u64, ctx: &mut TxContext): Car`
that returns a `Car` with a fresh id and the given name and speed.
"""

ASSEMBLY = Chapter(
    id=3,
    title="The Assembly Line",
    content=ASSEMBLY_CONTENT,
    initial_code=ASSEMBLY_INITIAL,
    expected_code=ASSEMBLY_EXPECTED,
    validate=ChapterValidator(
        expected_code=ASSEMBLY_EXPECTED,
        requirements=(
            _module_requirement(1),
            Requirement(
                snippet="public struct Car has key, store",
                message='keep the "public struct Car has key, store" declaration from chapter 2',
                anchor=contains("struct"),
                default_line=4,
            ),
            Requirement(
                snippet="public fun new_car(",
                message='missing constructor "public fun new_car(...)"',
                anchor=contains("fun ", "// TODO"),
                default_line=10,
            ),
            Requirement(
                snippet="ctx: &mut TxContext",
                message='new_car must take "ctx: &mut TxContext" to create a UID',
                anchor=contains("fun new_car", "// TODO"),
                default_line=10,
            ),
            Requirement(
                snippet="object::new(ctx)",
                message='create the id with "object::new(ctx)"',
                anchor=contains("Car {", "// TODO"),
                default_line=11,
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Chapter 4: minting and transfer
# ---------------------------------------------------------------------------

DELIVERY_INITIAL = """module sui_garage::car_factory {
    use std::string::{String};

    public struct Car has key, store {
        id: UID,
        name: String,
        speed: u64,
    }

    public fun new_car(name: String, speed: u64, ctx: &mut TxContext): Car {
        Car {
            id: object::new(ctx),
            name,
            speed,
        }
    }

    // TODO: write mint_car, which builds a car and sends it to the caller

}"""

DELIVERY_EXPECTED = """module sui_garage::car_factory {
    use std::string::{String};

    public struct Car has key, store {
        id: UID,
        name: String,
        speed: u64,
    }

    public fun new_car(name: String, speed: u64, ctx: &mut TxContext): Car {
        Car {
            id: object::new(ctx),
            name,
            speed,
        }
    }

    public fun mint_car(name: String, speed: u64, ctx: &mut TxContext) {
        let car = new_car(name, speed, ctx);
        transfer::public_transfer(car, ctx.sender());
    }
}"""

DELIVERY_CONTENT = """\
## Chapter 4: Delivery Day (Ownership & Transfer)

A car sitting in the factory belongs to no one. On Sui, ownership is explicit:
an object is handed to an address with a transfer. Because `Car` has `store`,
anyone can move it with `transfer::public_transfer`.

The caller's address is available from the transaction context as
`ctx.sender()`.

### Put it to the test

Write `public fun mint_car(name: String, speed: u64, ctx: &mut TxContext)`
that builds a car with `new_car(name, speed, ctx)` and sends it to the caller
with `transfer::public_transfer(car, ctx.sender());`.
"""

DELIVERY = Chapter(
    id=4,
    title="Delivery Day",
    content=DELIVERY_CONTENT,
    initial_code=DELIVERY_INITIAL,
    expected_code=DELIVERY_EXPECTED,
    validate=ChapterValidator(
        expected_code=DELIVERY_EXPECTED,
        requirements=(
            _module_requirement(1),
            Requirement(
                snippet="public fun new_car(",
                message='keep the "new_car" constructor from chapter 3',
                anchor=contains("fun new_car"),
                default_line=10,
            ),
            Requirement(
                snippet="public fun mint_car(",
                message='missing entry point "public fun mint_car(...)"',
                anchor=contains("fun mint_car", "// TODO"),
                default_line=18,
            ),
            Requirement(
                snippet="new_car(name, speed, ctx)",
                message='build the car with "new_car(name, speed, ctx)"',
                anchor=contains("let car", "// TODO"),
                default_line=19,
            ),
            Requirement(
                snippet="transfer::public_transfer(car, ctx.sender())",
                message='send the car to the caller with "transfer::public_transfer(car, ctx.sender())"',
                anchor=contains("transfer::", "// TODO"),
                default_line=20,
            ),
        ),
    ),
)


CHAPTERS: tuple[Chapter, ...] = (CHASSIS, BLUEPRINT, ASSEMBLY, DELIVERY)


def get_chapter(chapter_id: int, chapters: tuple[Chapter, ...] = CHAPTERS) -> Chapter | None:
    """Look up a chapter by id."""
    for chapter in chapters:
        if chapter.id == chapter_id:
            return chapter
    return None
