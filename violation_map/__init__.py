"""Agrupamento de infrações de trânsito por centróide fixo e mapa por quadrante."""
