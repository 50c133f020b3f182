# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Mathematical and physical constants (SI units).
"""

import math

import numpy as np


class Datum:
    pi = math.pi
    inf = math.inf
    nan = math.nan
    e = math.e
    sqrt2 = math.sqrt(2.0)
    eps = float(np.finfo(float).eps)
    log_min = math.log(float(np.finfo(float).tiny))
    log_max = math.log(float(np.finfo(float).max))
    euler = 0.5772156649015329  # Euler-Mascheroni
    gratio = 1.6180339887498948  # golden ratio

    m_u = 1.660538782e-27  # atomic mass constant (kg)
    N_A = 6.02214179e23  # Avogadro
    k = 1.3806504e-23  # Boltzmann (J/K)
    k_evk = 8.617343e-5  # Boltzmann (eV/K)
    a_0 = 0.52917720859e-10  # Bohr radius (m)
    mu_B = 927.400915e-26  # Bohr magneton
    Z_0 = 3.76730313461771e-2  # characteristic impedance of vacuum (ohms)
    G_0 = 7.7480917004e-5  # conductance quantum (S)
    k_e = 8.9875517873681764e9  # Coulomb's constant
    eps_0 = 8.85418781762039e-12  # electric constant
    m_e = 9.10938215e-31  # electron mass (kg)
    eV = 1.602176487e-19  # electron volt (J)
    ec = 1.602176487e-19  # elementary charge (C)
    F = 96485.3399  # Faraday constant
    alpha = 7.2973525376e-3  # fine-structure constant
    alpha_inv = 137.035999679
    K_J = 483597.891e9  # Josephson constant
    mu_0 = 1.25663706143592e-06  # magnetic constant
    phi_0 = 2.067833667e-15  # magnetic flux quantum
    R = 8.314472  # molar gas constant
    G = 6.67428e-11  # Newtonian gravitational constant
    h = 6.62606896e-34  # Planck
    h_bar = 1.054571628e-34  # Planck over 2 pi
    m_p = 1.672621637e-27  # proton mass (kg)
    R_inf = 10973731.568527  # Rydberg
    c_0 = 299792458.0  # speed of light in vacuum
    sigma = 5.670400e-8  # Stefan-Boltzmann
    R_k = 25812.807557  # von Klitzing
    b = 2.8977685e-3  # Wien wavelength displacement law
