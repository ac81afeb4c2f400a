"""
Histórico completo do veículo - custos, multas, danos, abastecimentos e
contratos numa única linha do tempo
"""
from __future__ import annotations

from collections import OrderedDict

from locadora.models import db, Abastecimento, Contrato, Custo, DanoInspecao, Multa, Veiculo
from locadora.services.datas import parse_date, to_decimal

TIPOS_EVENTO = ('cost', 'fine', 'damage', 'fuel', 'contract')


def _evento(tipo, registro, veiculo, data, descricao, valor=None, quilometragem=None, observacoes=None):
    return {
        'id': f'{tipo}_{registro.id}',
        'veiculo_id': veiculo.id,
        'placa': veiculo.placa,
        'modelo': veiculo.modelo,
        'tipo_evento': tipo,
        'data_evento': data.isoformat() if data else None,
        'descricao': descricao,
        'valor': float(valor) if valor is not None else None,
        'status_veiculo': veiculo.status,
        'quilometragem': quilometragem,
        'observacoes': observacoes,
        'criado_em': registro.criado_em.isoformat() if registro.criado_em else None
    }


def _data_ou_criacao(data, registro):
    if data:
        return data
    return registro.criado_em.date() if registro.criado_em else None


def _eventos_do_veiculo(veiculo) -> list[dict]:
    eventos = []

    for custo in Custo.query.filter_by(veiculo_id=veiculo.id).all():
        eventos.append(_evento('cost', custo, veiculo, custo.data_custo,
                               f'{custo.categoria}: {custo.descricao}', custo.valor,
                               observacoes=custo.observacoes))

    for multa in Multa.query.filter_by(veiculo_id=veiculo.id).all():
        eventos.append(_evento('fine', multa, veiculo, _data_ou_criacao(multa.data_infracao, multa),
                               f'Multa: {multa.tipo_infracao or multa.descricao or "Infração"}', multa.valor,
                               observacoes=multa.observacoes))

    for dano in DanoInspecao.query.filter_by(veiculo_id=veiculo.id).all():
        eventos.append(_evento('damage', dano, veiculo, _data_ou_criacao(None, dano),
                               f'Dano ({dano.severidade or "-"}): {dano.local or dano.descricao or "-"}',
                               dano.custo_estimado, observacoes=dano.observacoes))

    for abastecimento in Abastecimento.query.filter_by(veiculo_id=veiculo.id).all():
        eventos.append(_evento('fuel', abastecimento, veiculo,
                               _data_ou_criacao(abastecimento.data_abastecimento, abastecimento),
                               f'Abastecimento: {abastecimento.litros or 0}L {abastecimento.tipo_combustivel or ""}'.strip(),
                               abastecimento.custo_combustivel, quilometragem=abastecimento.quilometragem,
                               observacoes=abastecimento.observacoes))

    for contrato in Contrato.query.filter_by(veiculo_id=veiculo.id).all():
        cliente = contrato.cliente
        eventos.append(_evento('contract', contrato, veiculo, contrato.data_inicio,
                               f'Contrato {contrato.numero} - {cliente.nome if cliente else "-"} ({contrato.status})'))

    return eventos


def historico_veiculo(veiculo_id, tipo_evento=None, data_inicio=None, data_fim=None,
                      valor_minimo=None, valor_maximo=None) -> list[dict]:
    """
    Linha do tempo do veículo, mais recentes primeiro

    Filtros de valor descartam eventos sem valor (contratos).
    """
    veiculo = db.session.get(Veiculo, veiculo_id)
    if not veiculo:
        raise ValueError('Veículo não encontrado')
    if tipo_evento and tipo_evento not in TIPOS_EVENTO:
        raise ValueError(f'Tipo de evento inválido. Use um dos seguintes: {", ".join(TIPOS_EVENTO)}')

    inicio = parse_date(data_inicio)
    fim = parse_date(data_fim)
    minimo = to_decimal(valor_minimo)
    maximo = to_decimal(valor_maximo)

    eventos = _eventos_do_veiculo(veiculo)
    if tipo_evento:
        eventos = [e for e in eventos if e['tipo_evento'] == tipo_evento]
    if inicio:
        eventos = [e for e in eventos if e['data_evento'] and e['data_evento'] >= inicio.isoformat()]
    if fim:
        eventos = [e for e in eventos if e['data_evento'] and e['data_evento'] <= fim.isoformat()]
    if minimo is not None:
        eventos = [e for e in eventos if e['valor'] is not None and e['valor'] >= float(minimo)]
    if maximo is not None:
        eventos = [e for e in eventos if e['valor'] is not None and e['valor'] <= float(maximo)]

    eventos.sort(key=lambda e: (e['data_evento'] or '', e['criado_em'] or ''), reverse=True)
    return eventos


def estatisticas_por_tipo(veiculo_id) -> dict:
    """Total e quantidade por tipo de evento (somente eventos com valor)."""
    stats = {}
    for evento in historico_veiculo(veiculo_id):
        if evento['valor'] is None:
            continue
        item = stats.setdefault(evento['tipo_evento'], {'total': 0.0, 'quantidade': 0})
        item['total'] += evento['valor']
        item['quantidade'] += 1
    return stats


def linha_do_tempo_mensal(veiculo_id) -> list[dict]:
    """Eventos agrupados por mês (YYYY-MM), em ordem cronológica."""
    meses = OrderedDict()
    for evento in reversed(historico_veiculo(veiculo_id)):
        if not evento['data_evento']:
            continue
        chave = evento['data_evento'][:7]
        mes = meses.setdefault(chave, {'mes': chave, 'eventos': [], 'valor_total': 0.0, 'quantidade': 0})
        mes['eventos'].append(evento)
        mes['valor_total'] += evento['valor'] or 0.0
        mes['quantidade'] += 1
    return list(meses.values())
