"""Form definition configuration.

FormConfig is a frozen dataclass — immutable after creation, shared by
every builder of a form tree.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Defaults applied by builders. Immutable after creation.

    Override what you need::

        config = FormConfig(trim=False, prefix_separator="-")
        builder = FormBuilder(config=config)
    """

    # Children
    trim: bool = True  # Append a TrimFilter to every child
    filter_empty_values: bool = True  # Drop empty items of submitted arrays
    prefix_separator: str = "_"  # ChildBuilder.prefix() default: name + separator

    # Leaves
    datetime_format: str | None = None  # None = ISO 8601
