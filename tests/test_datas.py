from datetime import date

from locadora.services.datas import (
    dia_no_mes,
    parse_mes,
    proxima_data_ciclo,
    proximo_vencimento,
    to_decimal,
)


def test_parse_mes_aceita_ano_mes_e_data():
    assert parse_mes('2025-03') == date(2025, 3, 1)
    assert parse_mes('2025-03-17') == date(2025, 3, 1)
    assert parse_mes(date(2025, 3, 17)) == date(2025, 3, 1)
    assert parse_mes('março') is None


def test_dia_no_mes_limita_ao_ultimo_dia():
    assert dia_no_mes(date(2025, 4, 1), 31) == date(2025, 4, 30)
    assert dia_no_mes(date(2025, 2, 1), 30) == date(2025, 2, 28)
    assert dia_no_mes(date(2024, 2, 1), 30) == date(2024, 2, 29)
    assert dia_no_mes(date(2025, 3, 1), 10) == date(2025, 3, 10)


def test_proxima_data_ciclo():
    assert proxima_data_ciclo(date(2025, 3, 5), 5) == date(2025, 4, 5)
    assert proxima_data_ciclo(date(2025, 1, 31), 31) == date(2025, 2, 28)
    assert proxima_data_ciclo(date(2025, 2, 28), 31) == date(2025, 3, 31)
    assert proxima_data_ciclo(date(2025, 12, 10), 10) == date(2026, 1, 10)


def test_proxima_data_ciclo_respeita_limite_minimo():
    # Dia do modelo alterado para antes do vencimento pago
    assert proxima_data_ciclo(date(2025, 3, 20), 5, nao_antes_de=date(2025, 4, 21)) == date(2025, 5, 5)


def test_proximo_vencimento_por_tipo():
    base = date(2025, 1, 31)
    assert proximo_vencimento(base, 'monthly') == date(2025, 2, 28)
    assert proximo_vencimento(base, 'weekly') == date(2025, 2, 7)
    assert proximo_vencimento(base, 'yearly') == date(2026, 1, 31)
    assert proximo_vencimento(base, None) == date(2025, 2, 28)


def test_to_decimal():
    assert to_decimal('150.50') == to_decimal(150.5)
    assert to_decimal('') is None
    assert to_decimal('abc') is None


def test_to_decimal_rejeita_nao_finitos():
    for valor in ('NaN', 'nan', 'sNaN', 'Infinity', '-Infinity', float('inf')):
        assert to_decimal(valor) is None
