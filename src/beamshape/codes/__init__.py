# Design code provisions
from .base_code import DesignCode, CodeLimits, ConcreteShear
from .is456 import IS456
from .aci318 import ACI318

from beamshape.models.inputs import DesignCodeType, resolve_design_code


_CODES = {
    DesignCodeType.CODE_A: IS456,
    DesignCodeType.CODE_B: ACI318,
}


def get_design_code(code=DesignCodeType.CODE_A) -> DesignCode:
    """Return the provisions object for a design code selector."""
    return _CODES[resolve_design_code(code)]()
