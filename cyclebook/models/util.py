from typing import Union

from tortoise import Model


def resolve_id(target: Union[Model, int]):
    if isinstance(target, Model):
        return target.pk
    elif isinstance(target, int):
        return target
    else:
        raise TypeError(f"Target {target} is neither a Model or an int.")
