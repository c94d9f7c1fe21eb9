"""Custom argparse actions with environment variable defaults.

Every option of the ``docbook2adoc`` command can take its default from an
environment variable named ``DOCBOOK2ADOC_<DEST>``, where ``<DEST>`` is the
upper-cased argparse destination. The actions also record which arguments
were given explicitly on the command line.
"""

from __future__ import annotations

#  Copyright (c) 2025 Tom Villani, Ph.D.
import argparse
import logging
import os
from typing import Any, Callable, Optional, Sequence, Union

ENV_PREFIX = "DOCBOOK2ADOC_"

_TRUTHY_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable consulted for an argparse destination.

    Examples
    --------
        >>> env_key_for("id_prefix")
        'DOCBOOK2ADOC_ID_PREFIX'

    """
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_').replace('.', '_')}"


def _mark_provided(namespace: argparse.Namespace, dest: str) -> None:
    if not hasattr(namespace, "_provided_args"):
        namespace._provided_args = set()
    namespace._provided_args.add(dest)


class TrackingStoreAction(argparse.Action):
    """Store action that tracks explicitly provided values.

    Also supports environment variable defaults using the pattern
    DOCBOOK2ADOC_DEST_NAME.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        nargs: Optional[Union[int, str]] = None,
        const: Optional[Any] = None,
        default: Optional[Any] = None,
        type: Optional[Callable[[str], Any]] = None,
        choices: Optional[Sequence[Any]] = None,
        required: bool = False,
        help: Optional[str] = None,
        metavar: Optional[Union[str, tuple[str, ...]]] = None,
    ) -> None:
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            try:
                default = type(env_value) if type is not None else env_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")
            else:
                if choices is not None and default not in choices:
                    logging.warning(f"Invalid environment variable {env_key}={env_value}: not one of {list(choices)}")
                    default = None

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=default,
            type=type,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, values)
        _mark_provided(namespace, self.dest)


class TrackingStoreTrueAction(argparse.Action):
    """Store_true action that tracks whether the flag was explicitly provided.

    An environment value of ``true``, ``1``, ``yes`` or ``on`` turns the
    default on.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = False,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            default = env_value.lower() in _TRUTHY_VALUES

        super().__init__(
            option_strings=option_strings, dest=dest, nargs=0, const=True, default=default, required=required, help=help
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, True)
        _mark_provided(namespace, self.dest)


class TrackingStoreFalseAction(argparse.Action):
    """Store_false action for ``--no-*`` flags.

    The environment variable is named after the destination, not the flag:
    ``DOCBOOK2ADOC_NORMALIZE_IDS=false`` has the same effect as passing
    ``--no-normalize-ids``.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = True,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            default = env_value.lower() in _TRUTHY_VALUES

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=False,
            default=default,
            required=required,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        setattr(namespace, self.dest, False)
        _mark_provided(namespace, self.dest)


class TrackingAppendAction(argparse.Action):
    """Append action that tracks explicitly provided arguments.

    Environment values are split on commas. Values given on the command
    line replace the environment default instead of extending it.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        nargs: Optional[Union[int, str]] = None,
        const: Optional[Any] = None,
        default: Optional[list] = None,
        type: Optional[Callable[[str], Any]] = None,
        choices: Optional[Sequence[Any]] = None,
        required: bool = False,
        help: Optional[str] = None,
        metavar: Optional[Union[str, tuple[str, ...]]] = None,
    ) -> None:
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            default = [item.strip() for item in env_value.split(",") if item.strip()]
            if type is not None:
                try:
                    default = [type(item) for item in default]
                except (ValueError, TypeError) as e:
                    logging.warning(f"Invalid type conversion for {env_key}={env_value}: {e}")
                    default = None

        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=nargs,
            const=const,
            default=default,
            type=type,
            choices=choices,
            required=required,
            help=help,
            metavar=metavar,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        # argparse has already applied the type converter to ``values``
        provided = getattr(namespace, "_provided_args", set())
        items = getattr(namespace, self.dest, None) if self.dest in provided else None
        items = list(items) if items else []

        if isinstance(values, list):
            items.extend(values)
        else:
            items.append(values)

        setattr(namespace, self.dest, items)
        _mark_provided(namespace, self.dest)
