"""
Physical constants in SI base units.

Values are CODATA recommended values as published by NIST,
see https://physics.nist.gov/cuu/Constants/

Example:
    >>> from siformat.units import format_si
    >>> format_si(PhysicalConstants.LIGHT_YEAR, "G3", "metres")
    '9.46 peta-metres'
"""

# Classes --------------------------------------------------------------------------------------------------------------

class PhysicalConstants:
    """
    Physical constants as float class attributes.

    Units are given next to each value.
    """

    # @formatter:off

    # Universal
    LIGHT_SPEED = 299792458.0                    # m/s
    GRAVITATIONAL_CONSTANT = 6.67430e-11         # m^3/(kg s^2)
    PLANCK_CONSTANT = 6.62607015e-34             # J s
    REDUCED_PLANCK_CONSTANT = 1.0545718e-34      # J s
    MAGNETIC_CONSTANT = 1.25663706212e-6         # N/A^2
    ELECTRIC_CONSTANT = 8.8541878128e-12         # F/m

    # Electromagnetic
    MAGNETIC_FLUX_QUANTUM = 2.067833831e-15      # Wb
    ELEMENTARY_CHARGE = 1.602176634e-19          # C
    CONDUCTANCE_QUANTUM = 7.748091729e-5         # S

    # Atomic and nuclear
    ELECTRON_MASS = 9.1093837015e-31             # kg
    PROTON_MASS = 1.67262192369e-27              # kg
    FINE_STRUCTURE_CONSTANT = 7.2973525693e-3
    RYDBERG_CONSTANT = 10973731.568160           # 1/m
    BOHR_RADIUS = 5.29177210903e-11              # m
    CLASSICAL_ELECTRON_RADIUS = 2.8179403262e-15 # m

    # Physico-chemical
    ATOMIC_MASS_UNIT = 1.66053906660e-27         # kg
    AVOGADRO_CONSTANT = 6.02214076e23            # 1/mol
    FARADAY_CONSTANT = 96485.33212               # C/mol
    MOLAR_GAS_CONSTANT = 8.314462618             # J/(mol K)
    BOLTZMANN_CONSTANT = 1.380649e-23            # J/K
    STEFAN_BOLTZMANN_CONSTANT = 5.670374419e-8   # W/(m^2 K^4)

    # Non-SI units accepted for use with SI
    ELECTRON_VOLT = 1.602176634e-19              # J
    STANDARD_GRAVITY = 9.80665                   # m/s^2
    JULIAN_YEAR = 365.25 * 24 * 3600             # s
    LIGHT_YEAR = JULIAN_YEAR * LIGHT_SPEED       # m

    # Mathematical
    PI = 3.14159265359
    NATURAL_LOG_BASE = 2.71828182846

    # @formatter:on
