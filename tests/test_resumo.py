from datetime import date
from decimal import Decimal

from locadora.models import db, ContaPagar, Custo, DespesaRecorrente, Salario
from locadora.services import resumo_financeiro_service


def _conta(descricao, valor, vencimento, status='Pendente'):
    db.session.add(ContaPagar(descricao=descricao, valor=Decimal(valor), data_vencimento=vencimento,
                              categoria='Avulsa', status=status))


def test_resumo_financeiro(funcionario):
    _conta('Atrasada', '100.00', date(2025, 3, 1))
    _conta('Vence hoje', '200.00', date(2025, 3, 10))
    _conta('Vence em 7 dias', '300.00', date(2025, 3, 17))
    _conta('Vence depois', '400.00', date(2025, 3, 25))
    _conta('Paga', '50.00', date(2025, 3, 2), status='Pago')
    db.session.add(DespesaRecorrente(descricao='Internet', valor=Decimal('150.00'), dia_vencimento=10,
                                     categoria='Despesa Recorrente', ativo=True))
    db.session.add(DespesaRecorrente(descricao='Antiga', valor=Decimal('999.00'), dia_vencimento=10,
                                     categoria='Despesa Recorrente', ativo=False))
    db.session.add(Salario(funcionario_id=funcionario.id, valor=Decimal('5200.00'), data_pagamento=date(2025, 3, 5),
                           mes_referencia=date(2025, 3, 1)))
    db.session.add(Salario(funcionario_id=funcionario.id, valor=Decimal('5000.00'), data_pagamento=date(2025, 2, 5),
                           mes_referencia=date(2025, 2, 1)))
    db.session.commit()

    resumo = resumo_financeiro_service.resumo_financeiro(hoje=date(2025, 3, 10))

    assert resumo['total_pendente'] == 1000.0
    assert resumo['total_pago'] == 50.0
    assert resumo['total_atrasado'] == 100.0
    assert resumo['qtd_atrasadas'] == 1
    assert resumo['proximos_pagamentos'] == 500.0
    assert resumo['qtd_proximos'] == 2
    assert resumo['total_salarios'] == 5200.0
    assert resumo['total_recorrente'] == 150.0


def test_resumo_sem_dados(app):
    resumo = resumo_financeiro_service.resumo_financeiro(hoje=date(2025, 3, 10))
    assert resumo['total_pendente'] == 0.0
    assert resumo['qtd_proximos'] == 0
    assert resumo['total_salarios'] == 0.0


def test_sincronizar_custos_contas_pagar(app):
    aberto = Custo(categoria='Compra', descricao='Filtro de óleo', valor=Decimal('85.00'),
                   data_custo=date(2025, 3, 3), status='Autorizado', recorrente=False)
    a_definir = Custo(categoria='Funilaria', descricao='Orçamento', valor=Decimal('0'),
                      data_custo=date(2025, 3, 3), status='Pendente', recorrente=False)
    pago = Custo(categoria='Avulsa', descricao='Lavagem', valor=Decimal('40.00'),
                 data_custo=date(2025, 3, 3), status='Pago', recorrente=False)
    recorrente = Custo(categoria='Despesas', descricao='Rastreador', valor=Decimal('89.90'),
                       data_custo=date(2025, 3, 3), status='Pendente', recorrente=True)
    fora_da_lista = Custo(categoria='Excesso Km', descricao='Km excedente', valor=Decimal('120.00'),
                          data_custo=date(2025, 3, 4), status='Pendente', recorrente=False)
    db.session.add_all([aberto, a_definir, pago, recorrente, fora_da_lista])
    db.session.commit()

    assert resumo_financeiro_service.sincronizar_custos_contas_pagar() == 2
    db.session.commit()
    assert resumo_financeiro_service.sincronizar_custos_contas_pagar() == 0

    contas = {c.referencia_origem_id: c for c in ContaPagar.query.all()}
    assert set(contas) == {aberto.id, fora_da_lista.id}
    assert contas[aberto.id].origem_tipo == 'Custo'
    assert contas[aberto.id].categoria == 'Compra'
    assert contas[aberto.id].status == 'Autorizado'
    assert contas[fora_da_lista.id].categoria == 'Despesas'
