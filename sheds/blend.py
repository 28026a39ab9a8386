#
# Sheds - dive club resources library.
#
# Copyright (C) 2018-2024 by Sheds Team
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

"""
Introduction
------------
Nitrox is blended in a dive cylinder by partial pressure blending. Oxygen
is decanted from oxygen banks into the cylinder, then the cylinder is
topped off with air from a compressor.

The blender calculates the actions an operator has to perform to turn the
gas in a cylinder into the target gas

Bleed
    Vent gas from the cylinder. Needed when there is already more oxygen
    in the cylinder than in the target gas or when the oxygen to add would
    not fit into the cylinder.
AddFromBank
    Decant oxygen from an oxygen bank. Banks are used in the order
    given by the caller until the required amount of oxygen is reached.
TopOff
    Fill the cylinder to the target pressure with air.
Pay
    Total price of the oxygen used.

Equations
---------
The calculations use Dalton's law, gas is ideal and all pressure and
volume arithmetic is linear. The partial pressure of oxygen is

    .. math::

        P_{O_2} = P * F_{O_2}

If the target oxygen partial pressure :math:`P_d * M_d` is lower than the
oxygen partial pressure in the cylinder :math:`P_s * M_s` and the
cylinder gas is richer than the target gas, then the cylinder is bled down
to

    .. math::

        P_b = P_d * (M_d - M_t) / (M_s - M_t)

where :math:`M_t` is oxygen fraction of air. The cylinder is then topped
off with air and no oxygen is added.

Otherwise, the volume of oxygen to decant from the banks [litres at 1 bar]
is

    .. math::

        V = S_c * (P_d * M_d - P_b * M_s) / M_f

where :math:`S_c` is the cylinder size and :math:`M_f` is oxygen fraction
of bank gas. Cylinder pressure :math:`P_b` is lowered to
:math:`P_d * (M_f - M_d) / (M_f - M_s)` if the oxygen would not fit
into the cylinder. Oxygen bank of size :math:`S_b` at pressure :math:`P_{bank}`
can deliver up to :math:`S_b * P_{bank}` litres and drawing :math:`v`
litres lowers its pressure by :math:`v / S_b`. A litre costs bank price.

Example
~~~~~~~
A 10 litre cylinder holds 96 bar of air (21%). Fill it with EAN32 to
200 bar using 47.5 litre bank at 190 bar, 0.02 per litre

    >>> bank = OxygenBank('2', 190, 47.5, 0.02)
    >>> c = BlendConditions(96, 0.21, 10, 200, 0.32)
    >>> plan = plan_blend(c, [bank])
    >>> plan.feasible
    True
    >>> [type(a).__name__ for a in plan.actions]
    ['AddFromBank', 'TopOff', 'Pay']
    >>> round(plan.actions[0].used_litres, 4)
    438.4
    >>> round(bank.bar, 4)
    180.7705
    >>> round(plan.total_cost, 4)
    8.768
    >>> plan.final.pressure
    200
"""

from collections import namedtuple
import logging
import math

from .error import ConfigError, BlendError, InfeasibleBlendError
from .flow import coroutine, sender
from . import const

logger = logging.getLogger(__name__)


GasState = namedtuple('GasState', 'pressure mix volume')
GasState.__doc__ = """
Gas content of a cylinder.

:var pressure: Pressure [bar].
:var mix: O2 fraction, i.e. 0.32.
:var volume: Cylinder size [litres].
"""

BlendConditions = namedtuple(
    'BlendConditions',
    'start_pressure start_mix cylinder_size target_pressure target_mix'
    ' temperature o2_price'
)
BlendConditions.__new__.__defaults__ = (const.TEMPERATURE, 0.0)
BlendConditions.__doc__ = """
Conditions of a cylinder fill.

:var start_pressure: Pressure of gas in the cylinder [bar].
:var start_mix: O2 fraction of gas in the cylinder.
:var cylinder_size: Cylinder size [litres].
:var target_pressure: Pressure of target gas [bar].
:var target_mix: O2 fraction of target gas.
:var temperature: Ambient temperature [C], kept for real gas correction.
:var o2_price: Price of the cheapest oxygen [per litre], used to value
    vented oxygen.
"""

Bleed = namedtuple('Bleed', 'drained_litres wasted_litres wasted_cost')
Bleed.__doc__ = """
Vent gas from a cylinder.

:var drained_litres: Gas vented [litres at 1 bar].
:var wasted_litres: Oxygen in excess of air vented [litres].
:var wasted_cost: Price of wasted oxygen (not part of plan cost).
"""

AddFromBank = namedtuple('AddFromBank', 'bank_id used_litres left_bar cost')
AddFromBank.__doc__ = """
Decant oxygen from an oxygen bank.

:var bank_id: Oxygen bank id.
:var used_litres: Oxygen decanted [litres at 1 bar].
:var left_bar: Bank pressure after decanting [bar].
:var cost: Price of decanted oxygen.
"""

TopOff = namedtuple('TopOff', 'added_bar')
TopOff.__doc__ = """
Top-off a cylinder with air.

:var added_bar: Pressure of air added [bar].
"""

Pay = namedtuple('Pay', 'cost')
Pay.__doc__ = """
Total price of a fill.

:var cost: Price of oxygen used.
"""

BlendStep = namedtuple('BlendStep', 'action gas')
BlendStep.__doc__ = """
Blend action and gas in a cylinder after the action.

:var action: Blend action.
:var gas: Gas state after the action.
"""

BlendPlan = namedtuple(
    'BlendPlan', 'actions feasible total_cost final shortfall'
)
BlendPlan.__doc__ = """
Result of blend planning.

:var actions: List of blend actions.
:var feasible: False if banks cannot deliver enough oxygen.
:var total_cost: Price of oxygen drawn from banks.
:var final: Gas state after last action.
:var shortfall: Oxygen missing when blend is not feasible [litres].
"""

# order of actions in a plan
_ACTION_ORDER = {Bleed: 0, AddFromBank: 1, TopOff: 2, Pay: 3}


class OxygenBank(object):
    """
    Oxygen storage cylinder.

    Banks are owned by configuration and shared between fills, the blender
    lowers bank pressure when oxygen is drawn.

    :var id: Bank id.
    :var bar: Current bank pressure [bar].
    :var size: Bank size [litres].
    :var price: Price of oxygen [per litre].
    """
    def __init__(self, id, bar, size, price):
        self.id = id
        self.bar = bar
        self.size = size
        self.price = price


    @property
    def available(self):
        """
        Oxygen available in the bank [litres at 1 bar].
        """
        return self.size * max(self.bar, 0)


    def copy(self):
        """
        Create copy of the bank.
        """
        return OxygenBank(self.id, self.bar, self.size, self.price)


    def __repr__(self):
        return 'OxygenBank(id={!r}, bar={:.4f}, size={}, price={})'.format(
            self.id, self.bar, self.size, self.price
        )



class Blender(object):
    """
    Nitrox blender.

    Calculate actions required to blend target gas in a cylinder.

    :var fill_mix: O2 fraction of bank gas.
    :var top_off_mix: O2 fraction of top-off gas.
    :var temperature: Ambient temperature [C].
    :var o2_price: Price of the cheapest oxygen [per litre].
    """
    def __init__(self):
        super().__init__()
        self.fill_mix = const.BANK_O2
        self.top_off_mix = const.AIR_O2
        self.temperature = const.TEMPERATURE
        self.o2_price = 0.0


    def gas_states(self, conditions):
        """
        Validate fill conditions and return start and target gas states.

        `ConfigError` is raised if the conditions are not physically
        possible.

        :param conditions: Blend conditions.
        """
        c = conditions
        if not c.cylinder_size > 0:
            raise ConfigError(
                'Cylinder size has to be positive, got {}'
                .format(c.cylinder_size)
            )
        if c.start_pressure < 0 or c.target_pressure < 0:
            raise ConfigError('Cylinder pressure cannot be negative')
        if not (0 <= c.start_mix <= 1 and 0 <= c.target_mix <= 1):
            raise ConfigError('O2 fraction has to be within 0 and 1')

        start = GasState(c.start_pressure, c.start_mix, c.cylinder_size)
        target = GasState(c.target_pressure, c.target_mix, c.cylinder_size)
        return start, target


    def _too_rich(self, gas, target):
        """
        Check if there is more oxygen in the cylinder than in the target
        gas, so the cylinder gas has to be diluted with air.

        :param gas: Gas in the cylinder.
        :param target: Target gas.
        """
        return target.pressure * target.mix < gas.pressure * gas.mix \
            and gas.mix > target.mix


    def _bleed_pressure(self, gas, target):
        """
        Calculate pressure a cylinder has to be bled down to.

        Gas richer than target gas is bled down to the pressure at which
        topping off with air alone does not exceed target O2 fraction.
        Otherwise the pressure is the lower of current cylinder pressure
        and pressure at which oxygen required for target gas fits into the
        cylinder.

        :param gas: Gas in the cylinder.
        :param target: Target gas.
        """
        if self._too_rich(gas, target):
            mt = self.top_off_mix
            p = 0.0
            if target.mix > mt:
                p = target.pressure * (target.mix - mt) / (gas.mix - mt)
            return max(min(p, gas.pressure), 0.0)

        p = gas.pressure
        mf = self.fill_mix
        if mf > gas.mix:
            p = min(p, target.pressure * (mf - target.mix) / (mf - gas.mix))
        return max(p, 0.0)


    def _bleed(self, gas, pressure):
        """
        Bleed cylinder down to specified pressure.

        :param gas: Gas in the cylinder.
        :param pressure: Pressure after bleeding [bar].
        """
        drained = gas.volume * (gas.pressure - pressure)
        wasted = drained * max(gas.mix - self.top_off_mix, 0)
        action = Bleed(drained, wasted, wasted * self.o2_price)
        return action, gas._replace(pressure=pressure)


    def _oxygen_needed(self, gas, target):
        """
        Calculate volume of bank gas required for target gas [litres at 1
        bar].

        :param gas: Gas in the cylinder.
        :param target: Target gas.
        """
        v = gas.volume * (target.pressure * target.mix - gas.pressure * gas.mix)
        v /= self.fill_mix
        return 0.0 if v < const.EPSILON else v


    def _add_gas(self, gas, litres, mix):
        """
        Calculate gas state after adding gas to a cylinder.

        :param gas: Gas in the cylinder.
        :param litres: Volume of gas added [litres at 1 bar].
        :param mix: O2 fraction of added gas.
        """
        added = litres / gas.volume
        pressure = gas.pressure + added
        o2 = gas.pressure * gas.mix + added * mix
        mix = o2 / pressure if pressure > 0 else gas.mix
        return GasState(pressure, mix, gas.volume)


    def _draw(self, bank, litres):
        """
        Draw oxygen from a bank.

        Bank pressure is lowered in place.

        :param bank: Oxygen bank.
        :param litres: Oxygen required [litres at 1 bar].
        """
        available = bank.available
        if litres >= available:
            litres = available
            bank.bar = 0.0
        else:
            bank.bar -= litres / bank.size
        return AddFromBank(bank.id, litres, bank.bar, litres * bank.price)


    def _top_off(self, gas, target):
        """
        Top-off cylinder with air to target pressure.

        :param gas: Gas in the cylinder.
        :param target: Target gas.
        """
        added = max(target.pressure - gas.pressure, 0.0)
        o2 = gas.pressure * gas.mix + added * self.top_off_mix
        mix = o2 / target.pressure if target.pressure > 0 else gas.mix
        return TopOff(added), GasState(target.pressure, mix, gas.volume)


    def calculate(self, start, target, banks):
        """
        Calculate blend actions to turn start gas into target gas.

        The method returns an iterator of blend steps. The oxygen banks
        are used in the order of the list and their pressure is lowered as
        oxygen is drawn.

        `InfeasibleBlendError` is raised after last bank is drawn from, if
        the banks cannot deliver enough oxygen. Oxygen drawn until then
        stays drawn.

        :param start: Gas in the cylinder.
        :param target: Target gas.
        :param banks: List of oxygen banks.
        """
        gas = start
        dilute = self._too_rich(gas, target)
        pressure = self._bleed_pressure(gas, target)
        if pressure < gas.pressure:
            action, gas = self._bleed(gas, pressure)
            if __debug__:
                logger.debug('bleed to {:.4f}bar'.format(pressure))
            yield BlendStep(action, gas)

        # diluted gas is topped off with air only
        needed = 0.0 if dilute else self._oxygen_needed(gas, target)
        if __debug__:
            logger.debug('oxygen needed {:.4f}l'.format(needed))

        total = 0
        for bank in banks:
            if needed == 0:
                break
            if bank.bar <= 0:
                continue

            action = self._draw(bank, needed)
            needed -= action.used_litres
            if needed < const.EPSILON:
                needed = 0
            total += action.cost
            gas = self._add_gas(gas, action.used_litres, self.fill_mix)
            yield BlendStep(action, gas)

        if needed > 0:
            raise InfeasibleBlendError(needed)

        action, gas = self._top_off(gas, target)
        yield BlendStep(action, gas)

        if total > 0:
            yield BlendStep(Pay(total), gas)



class BlendValidator(object):
    """
    Blend step validator (coroutine class).

    Create coroutine object, then call it to start the coroutine.

    :var target: Target gas.
    """
    def __init__(self, target):
        self.target = target


    @coroutine
    def __call__(self):
        """
        Start the coroutine.
        """
        prev = None
        while True:
            step = yield
            self._order(prev, step)
            self._gas(step)
            prev = step


    def _order(self, prev, step):
        """
        Verify that blend actions are in order: bleed, oxygen, top-off,
        payment.

        :param prev: Previous blend step.
        :param step: Blend step to verify.
        """
        if prev is None:
            return
        k1 = _ACTION_ORDER[type(prev.action)]
        k2 = _ACTION_ORDER[type(step.action)]
        if k2 < k1 or k2 == k1 and k1 != 1:
            raise BlendError(
                'Blend action {} cannot follow {}'.format(step.action, prev.action)
            )


    def _gas(self, step):
        """
        Verify cylinder and bank pressures of a blend step.

        :param step: Blend step to verify.
        """
        action = step.action
        if step.gas.pressure < 0:
            raise BlendError('Negative cylinder pressure at {}'.format(step))
        if isinstance(action, AddFromBank) and action.left_bar < 0:
            raise BlendError('Negative bank pressure at {}'.format(step))
        if isinstance(action, TopOff) \
                and step.gas.pressure != self.target.pressure:
            raise BlendError(
                'Top-off to {}bar, target is {}bar'.format(
                    step.gas.pressure, self.target.pressure
                )
            )



def plan_blend(conditions, banks, validate=True):
    """
    Plan a cylinder fill.

    The pressure of oxygen banks used by the plan is lowered. Pass copies
    of banks to preview a fill.

    If the banks cannot deliver enough oxygen, the plan is not feasible,
    it has no top-off action and its shortfall is the missing oxygen.

    :param conditions: Blend conditions.
    :param banks: List of oxygen banks in order of use.
    :param validate: Validate blend steps if true.
    """
    blender = Blender()
    blender.temperature = conditions.temperature
    blender.o2_price = conditions.o2_price
    start, target = blender.gas_states(conditions)

    calc = blender.calculate
    if validate:
        calc = sender(calc, BlendValidator(target))

    steps = []
    shortfall = 0
    try:
        for step in calc(start, target, banks):
            steps.append(step)
    except InfeasibleBlendError as ex:
        logger.info('blend not feasible: {}'.format(ex))
        shortfall = ex.shortfall

    actions = [s.action for s in steps]
    cost = sum(a.cost for a in actions if isinstance(a, AddFromBank))
    final = steps[-1].gas if steps else start
    return BlendPlan(actions, shortfall == 0, cost, final, shortfall)


def mod(ppo2_max, mix):
    """
    Calculate maximum operating depth of a gas [m].

        >>> mod(1.4, 0.32)
        33

    :param ppo2_max: Maximum partial pressure of oxygen [bar].
    :param mix: O2 fraction of the gas.
    """
    return math.floor((ppo2_max / mix - 1) * 10)


def cheapest_price(banks):
    """
    Find price of the cheapest oxygen, null if no banks.

    :param banks: Collection of oxygen banks.
    """
    return min((b.price for b in banks), default=None)


# vim: sw=4:et:ai
