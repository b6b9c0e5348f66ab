from .data_schema import DataSchema
from .interaction_affordance import (InteractionAffordance, PropertyAffordance, ActionAffordance, 
                                    EventAffordance)
from .td import ThingDescription
