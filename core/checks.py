from django.core.checks import Error, Tags, register
from django.core.exceptions import FieldDoesNotExist

from .policies import RELATIONS


@register(Tags.models)
def check_delete_policies(app_configs, **kwargs):
    """
    on_delete каждого поля должен совпадать с политикой из реестра
    """
    errors = []
    for relation in RELATIONS:
        try:
            field = relation.get_field()
        except (LookupError, FieldDoesNotExist):
            errors.append(Error(
                f"Delete policy declared for unknown relation {relation}",
                id='core.E001',
            ))
            continue

        on_delete = field.remote_field.on_delete
        if on_delete is not relation.policy.on_delete:
            errors.append(Error(
                f"{relation} uses {on_delete.__name__}, "
                f"but its delete policy is {relation.policy.value}",
                obj=field,
                id='core.E002',
            ))
    return errors
