from datetime import date
from decimal import Decimal

from locadora import eventos
from locadora.models import db, Custo


def _novo_custo(descricao='Lavagem', recorrente=False):
    custo = Custo(categoria='Avulsa', descricao=descricao, valor=Decimal('10.00'),
                  data_custo=date(2025, 3, 1), recorrente=recorrente)
    db.session.add(custo)
    return custo


def test_assinante_recebe_um_evento_por_commit(app):
    recebidos = []
    eventos.inscrever('custo', recebidos.append)

    _novo_custo('A')
    db.session.flush()
    _novo_custo('B')
    db.session.commit()

    assert len(recebidos) == 1
    evento = recebidos[0]
    assert evento.tabela == 'custo'
    assert evento.tipos == {eventos.INSERT}
    assert sorted(a.registro['descricao'] for a in evento.alteracoes) == ['A', 'B']


def test_filtro_por_campo(app):
    recorrentes = []
    eventos.inscrever('custo', recorrentes.append, filtro={'recorrente': True})

    _novo_custo('Avulso')
    db.session.commit()
    assert recorrentes == []

    _novo_custo('Rastreador', recorrente=True)
    db.session.commit()
    assert len(recorrentes) == 1
    assert recorrentes[0].alteracoes[0].registro['descricao'] == 'Rastreador'


def test_filtro_callable_e_update(app):
    custo = _novo_custo()
    db.session.commit()

    recebidos = []
    eventos.inscrever('custo', recebidos.append, filtro=lambda r: r['status'] == 'Pago')

    custo.status = 'Pago'
    db.session.commit()

    assert len(recebidos) == 1
    assert recebidos[0].tipos == {eventos.UPDATE}


def test_rollback_descarta_alteracoes(app):
    recebidos = []
    eventos.inscrever('custo', recebidos.append)

    _novo_custo()
    db.session.flush()
    db.session.rollback()
    db.session.commit()

    assert recebidos == []


def test_assinante_com_erro_nao_afeta_os_demais(app, caplog):
    recebidos = []

    def falha(evento):
        raise RuntimeError('tela fechada')

    eventos.inscrever('custo', falha)
    eventos.inscrever('custo', recebidos.append)

    _novo_custo()
    db.session.commit()

    assert len(recebidos) == 1
    assert 'Erro em assinante da tabela custo' in caplog.text


def test_cancelar_assinatura(app):
    recebidos = []
    assinatura = eventos.inscrever('custo', recebidos.append)
    assinatura.cancelar()

    _novo_custo()
    db.session.commit()

    assert recebidos == []
    assert assinatura.ativa is False


def test_tabela_sem_assinantes_nao_coleta(app):
    _novo_custo()
    db.session.commit()

    assert eventos.CHAVE_ALTERACOES not in db.session.info
