"""Location aggregate: a port or terminal identified by its UN/LOCODE.

Locations are reference data. Every other element of the domain refers to a
location by its five character UN/LOCODE rather than by object reference.
"""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from shipping.domain import shipping

# Two letter country code followed by three letters or digits 2-9
UNLOCODE_PATTERN = re.compile(r"^[a-zA-Z]{2}[a-zA-Z2-9]{3}$")


@shipping.aggregate
class Location:
    unlocode = String(identifier=True, required=True, max_length=5)
    name = String(required=True, max_length=100)

    @invariant.post
    def unlocode_must_be_well_formed(self):
        if self.unlocode is not None and not UNLOCODE_PATTERN.match(self.unlocode):
            raise ValidationError({"unlocode": [f"Invalid UN/LOCODE: {self.unlocode!r}"]})
