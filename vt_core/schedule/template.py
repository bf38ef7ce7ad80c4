# vt_core/schedule/template.py
from __future__ import annotations

from dataclasses import dataclass

from vt_core.common.exceptions import InvalidInput


class OffsetUnit:
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    ALL = (DAYS, WEEKS, MONTHS, YEARS)


@dataclass(frozen=True)
class DoseDefinition:
    """
    One row of the schedule template: a named dose due `amount` `unit`s after birth.
    """
    name: str
    disease: str
    unit: str
    amount: int

    def __post_init__(self):
        if self.amount < 0:
            raise InvalidInput(
                "Dose offset must be >= 0.",
                details={"dose": self.name, "amount": self.amount},
            )


def _d(name: str, disease: str, **offset: int) -> DoseDefinition:
    (unit, amount), = offset.items()
    return DoseDefinition(name=name, disease=disease, unit=unit, amount=amount)


TB = "Tuberculosis"
POLIO = "Polio"
HEP_B = "Hepatitis B"
HEP_A = "Hepatitis A"
DPT = "Diphtheria, Pertussis, Tetanus"
HIB = "Haemophilus influenzae type b"
ROTA = "Rotavirus diarrhoea"
PNEUMO = "Pneumococcal disease"
MMR = "Measles, Mumps, Rubella"
TYPHOID = "Typhoid"
VARICELLA = "Chickenpox"
TD = "Tetanus, Diphtheria"


# Universal Immunization Programme (India) childhood schedule.
# Chronological by construction; generator output keeps this order.
SCHEDULE_TEMPLATE: tuple[DoseDefinition, ...] = (
    # At birth
    _d("BCG", TB, weeks=0),
    _d("OPV 0", POLIO, weeks=0),
    _d("Hepatitis B (Birth dose)", HEP_B, weeks=0),

    # 6 weeks
    _d("DPT 1", DPT, weeks=6),
    _d("OPV 1", POLIO, weeks=6),
    _d("Hepatitis B 1", HEP_B, weeks=6),
    _d("Hib 1", HIB, weeks=6),
    _d("Rotavirus 1", ROTA, weeks=6),
    _d("PCV 1", PNEUMO, weeks=6),

    # 10 weeks
    _d("DPT 2", DPT, weeks=10),
    _d("OPV 2", POLIO, weeks=10),
    _d("Hepatitis B 2", HEP_B, weeks=10),
    _d("Hib 2", HIB, weeks=10),
    _d("Rotavirus 2", ROTA, weeks=10),
    _d("PCV 2", PNEUMO, weeks=10),

    # 14 weeks
    _d("DPT 3", DPT, weeks=14),
    _d("OPV 3", POLIO, weeks=14),
    _d("Hepatitis B 3", HEP_B, weeks=14),
    _d("Hib 3", HIB, weeks=14),
    _d("Rotavirus 3", ROTA, weeks=14),
    _d("PCV 3", PNEUMO, weeks=14),

    # 9 months
    _d("MMR 1", MMR, months=9),
    _d("Typhoid Conjugate Vaccine", TYPHOID, months=9),

    # 12 months
    _d("Hepatitis A 1", HEP_A, months=12),

    # 16-24 months
    _d("DPT Booster 1", DPT, months=18),
    _d("OPV Booster", POLIO, months=18),
    _d("MMR 2", MMR, months=18),
    _d("Varicella 1", VARICELLA, months=18),
    _d("Hepatitis A 2", HEP_A, months=18),

    # 4-6 years
    _d("DPT Booster 2", DPT, years=5),
    _d("Varicella 2", VARICELLA, years=5),

    # 10 years
    _d("Td", TD, years=10),

    # 16 years
    _d("Td Booster", TD, years=16),
)
