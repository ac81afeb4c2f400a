"""
Notificações de alteração de tabelas ("tempo real")

Assinantes registram interesse em uma tabela (com filtro opcional) e são
chamados uma vez após cada commit que alterou linhas compatíveis.

Uso:
    assinatura = inscrever('custo', recarregar_custos, filtro={'recorrente': True})
    ...
    assinatura.cancelar()

Os callbacks rodam dentro do evento after_commit: não podem emitir SQL
na mesma sessão (marcar para recarregar, invalidar cache, enfileirar).
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

CHAVE_ALTERACOES = 'locadora_alteracoes'

INSERT = 'INSERT'
UPDATE = 'UPDATE'
DELETE = 'DELETE'


@dataclass(frozen=True)
class Alteracao:
    tabela: str
    tipo: str
    registro: dict


@dataclass
class EventoTabela:
    tabela: str
    alteracoes: list = field(default_factory=list)

    @property
    def tipos(self) -> set:
        return {a.tipo for a in self.alteracoes}


class Assinatura:
    def __init__(self, tabela: str, callback, filtro=None):
        self.tabela = tabela
        self.callback = callback
        self.filtro = filtro
        self.ativa = True

    def aceita(self, alteracao: Alteracao) -> bool:
        if self.filtro is None:
            return True
        if callable(self.filtro):
            return bool(self.filtro(alteracao.registro))
        return all(alteracao.registro.get(k) == v for k, v in self.filtro.items())

    def cancelar(self) -> None:
        self.ativa = False
        lista = _assinaturas.get(self.tabela, [])
        if self in lista:
            lista.remove(self)

    def __repr__(self):
        return f'<Assinatura {self.tabela} ativa={self.ativa}>'


_assinaturas: dict[str, list[Assinatura]] = defaultdict(list)


def inscrever(tabela: str, callback, filtro=None) -> Assinatura:
    """
    Registra callback(EventoTabela) para alterações em `tabela`.

    filtro pode ser um dict de igualdade (ex: {'recorrente': True}) ou um
    callable que recebe o registro alterado como dict.
    """
    assinatura = Assinatura(tabela, callback, filtro)
    _assinaturas[tabela].append(assinatura)
    return assinatura


def cancelar_todas() -> None:
    for lista in _assinaturas.values():
        for assinatura in lista:
            assinatura.ativa = False
    _assinaturas.clear()


def _snapshot(obj) -> dict:
    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key, None) for attr in mapper.column_attrs}


def _registrar(session, objetos, tipo) -> None:
    alteracoes = session.info.setdefault(CHAVE_ALTERACOES, [])
    for obj in objetos:
        tabela = getattr(obj, '__tablename__', None)
        if not tabela or tabela not in _assinaturas:
            continue
        alteracoes.append(Alteracao(tabela=tabela, tipo=tipo, registro=_snapshot(obj)))


@event.listens_for(Session, 'after_flush')
def _coletar_alteracoes(session, flush_context):
    if not _assinaturas:
        return
    _registrar(session, session.new, INSERT)
    _registrar(session, [o for o in session.dirty if session.is_modified(o)], UPDATE)
    _registrar(session, session.deleted, DELETE)


@event.listens_for(Session, 'after_rollback')
def _descartar_alteracoes(session):
    session.info.pop(CHAVE_ALTERACOES, None)


@event.listens_for(Session, 'after_commit')
def _despachar_alteracoes(session):
    alteracoes = session.info.pop(CHAVE_ALTERACOES, None)
    if not alteracoes:
        return
    despachar(alteracoes)


def despachar(alteracoes) -> int:
    """Entrega as alterações aos assinantes; retorna quantos foram chamados."""
    por_tabela = defaultdict(list)
    for alteracao in alteracoes:
        por_tabela[alteracao.tabela].append(alteracao)

    chamados = 0
    for tabela, lista in por_tabela.items():
        for assinatura in list(_assinaturas.get(tabela, [])):
            if not assinatura.ativa:
                continue
            compativeis = [a for a in lista if assinatura.aceita(a)]
            if not compativeis:
                continue
            try:
                assinatura.callback(EventoTabela(tabela=tabela, alteracoes=compativeis))
                chamados += 1
            except Exception:
                logger.exception('Erro em assinante da tabela %s', tabela)
    return chamados
