from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from dateutil.relativedelta import relativedelta


def parse_date(value) -> date | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def parse_mes(value) -> date | None:
    """Aceita 'YYYY-MM', 'YYYY-MM-DD' ou date; retorna o primeiro dia do mês."""
    if isinstance(value, str) and len(value) == 7:
        value = f'{value}-01'
    d = parse_date(value)
    return primeiro_dia_mes(d) if d else None


def to_decimal(value) -> Decimal | None:
    if value is None or (isinstance(value, str) and value.strip() == ''):
        return None
    try:
        resultado = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    # NaN e Infinity não são valores monetários
    return resultado if resultado.is_finite() else None


def primeiro_dia_mes(d: date) -> date:
    return d.replace(day=1)


def dia_no_mes(mes: date, dia: int) -> date:
    """
    Data do `dia` dentro do mês de `mes`. Dias inexistentes no mês
    (31 em abril, 30 em fevereiro) ficam no último dia do mês.
    """
    return mes + relativedelta(day=dia)


def proxima_data_ciclo(data_base: date, dia: int, nao_antes_de: date | None = None) -> date:
    """
    Próximo vencimento mensal: data_base + 1 mês com o dia forçado para `dia`.

    Se nao_antes_de for informado e a data calculada cair antes dele, avança
    mês a mês até alcançá-lo.
    """
    proxima = data_base + relativedelta(months=1, day=dia)
    while nao_antes_de and proxima < nao_antes_de:
        proxima = proxima + relativedelta(months=1, day=dia)
    return proxima


def proximo_vencimento(data: date, tipo_recorrencia: str | None) -> date:
    if tipo_recorrencia == 'weekly':
        return data + relativedelta(days=7)
    if tipo_recorrencia == 'yearly':
        return data + relativedelta(years=1)
    return data + relativedelta(months=1)
