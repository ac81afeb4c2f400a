"""
Custos virtuais - multas, danos de inspeção e abastecimentos projetados
no formato de custo no momento da leitura (nunca gravados na tabela custo)

Cada fonte sabe listar seus registros, projetá-los e gravar de volta uma
estimativa de valor na própria tabela. O id projetado carrega o prefixo
da fonte (ex: 'fine_12') para não colidir com ids de custos reais.
"""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from locadora.categorias import (
    ORIGEM_ABASTECIMENTO,
    ORIGEM_DANOS,
    ORIGEM_MULTAS,
    STATUS_AUTORIZADO,
    STATUS_PAGO,
    STATUS_PENDENTE,
)
from locadora.models import db, Abastecimento, DanoInspecao, Multa
from locadora.services.custo_service import CustoService
from locadora.services.datas import to_decimal

logger = logging.getLogger(__name__)


def _contexto_contrato(contrato):
    if not contrato:
        return None, None
    cliente = contrato.cliente
    return contrato.id, cliente


def _valor(v) -> float:
    return float(v) if v is not None else 0.0


class FonteCustoVirtual:
    """Contrato comum das fontes de custo virtual."""

    tipo: str = ''
    prefixo: str = ''
    modelo = None
    categoria: str = ''
    origem: str = ''

    def listar(self, veiculo_id=None):
        query = self.modelo.query
        if veiculo_id:
            query = query.filter(self.modelo.veiculo_id == veiculo_id)
        return query.order_by(self.modelo.criado_em.desc()).all()

    def valor(self, registro) -> Decimal:
        raise NotImplementedError

    def status(self, registro) -> str:
        raise NotImplementedError

    def descricao(self, registro) -> str:
        raise NotImplementedError

    def data(self, registro):
        return registro.criado_em.date() if registro.criado_em else None

    def projetar(self, registro) -> dict:
        valor = self.valor(registro)
        status = self.status(registro)
        contrato_id, cliente = _contexto_contrato(registro.contrato)
        veiculo = registro.veiculo
        data = self.data(registro)
        return {
            'id': f'{self.prefixo}_{registro.id}',
            'categoria': self.categoria,
            'descricao': self.descricao(registro),
            'valor': _valor(valor),
            'data_custo': data.isoformat() if data else None,
            'status': status,
            'origem': self.origem,
            'observacoes': registro.observacoes,
            'criado_por_nome': self.origem,
            'veiculo_id': registro.veiculo_id,
            'veiculo_placa': veiculo.placa if veiculo else None,
            'veiculo_modelo': veiculo.modelo if veiculo else None,
            'cliente_id': cliente.id if cliente else None,
            'cliente_nome': cliente.nome if cliente else None,
            'contrato_id': contrato_id,
            'recorrente': False,
            'valor_a_definir': (valor or 0) == 0 and status == STATUS_PENDENTE,
            'is_real_cost': True,
            'source_type': self.tipo,
            'source_id': registro.id,
            'criado_em': registro.criado_em.isoformat() if registro.criado_em else None
        }

    def atualizar_estimativa(self, registro_id: int, valor: Decimal, observacoes=None):
        raise NotImplementedError

    def _obter(self, registro_id):
        registro = db.session.get(self.modelo, registro_id)
        if not registro:
            raise ValueError(f'Registro de origem não encontrado ({self.tipo} {registro_id})')
        return registro

    def _aplicar_observacoes(self, registro, observacoes):
        if observacoes is not None:
            registro.observacoes = observacoes
        registro.atualizado_em = datetime.utcnow()


class FonteMultas(FonteCustoVirtual):
    tipo = 'fine'
    prefixo = 'fine'
    modelo = Multa
    categoria = 'Multa'
    origem = ORIGEM_MULTAS

    def valor(self, registro):
        return registro.valor or Decimal('0')

    def status(self, registro):
        return STATUS_PAGO if registro.pago else STATUS_PENDENTE

    def descricao(self, registro):
        return f'Multa: {registro.descricao or registro.tipo_infracao or "Infração de trânsito"}'

    def data(self, registro):
        return registro.data_infracao or super().data(registro)

    def atualizar_estimativa(self, registro_id, valor, observacoes=None):
        multa = self._obter(registro_id)
        multa.valor = valor
        self._aplicar_observacoes(multa, observacoes)
        db.session.add(multa)
        return multa


class FonteDanos(FonteCustoVirtual):
    tipo = 'damage'
    prefixo = 'damage'
    modelo = DanoInspecao
    categoria = 'Funilaria'
    origem = ORIGEM_DANOS

    def valor(self, registro):
        return registro.custo_estimado or Decimal('0')

    def status(self, registro):
        if registro.reparado:
            return STATUS_PAGO
        if registro.custo_estimado and registro.custo_estimado > 0:
            return STATUS_AUTORIZADO
        return STATUS_PENDENTE

    def descricao(self, registro):
        return f'Dano: {registro.descricao or "Avaria identificada"}'

    def atualizar_estimativa(self, registro_id, valor, observacoes=None):
        dano = self._obter(registro_id)
        dano.custo_estimado = valor
        self._aplicar_observacoes(dano, observacoes)
        db.session.add(dano)
        return dano


class FonteAbastecimentos(FonteCustoVirtual):
    tipo = 'fuel'
    prefixo = 'fuel'
    modelo = Abastecimento
    categoria = 'Combustível'
    origem = ORIGEM_ABASTECIMENTO

    def listar(self, veiculo_id=None):
        query = Abastecimento.query.filter(Abastecimento.custo_combustivel.isnot(None))
        if veiculo_id:
            query = query.filter(Abastecimento.veiculo_id == veiculo_id)
        return query.order_by(Abastecimento.criado_em.desc()).all()

    def valor(self, registro):
        return registro.custo_combustivel or Decimal('0')

    def status(self, registro):
        return STATUS_PAGO if registro.pago else STATUS_PENDENTE

    def descricao(self, registro):
        litros = registro.litros if registro.litros is not None else 0
        return f'Combustível: {registro.tipo_combustivel or "Gasolina"} - {litros}L'

    def data(self, registro):
        return registro.data_abastecimento or super().data(registro)

    def atualizar_estimativa(self, registro_id, valor, observacoes=None):
        abastecimento = self._obter(registro_id)
        abastecimento.custo_combustivel = valor
        self._aplicar_observacoes(abastecimento, observacoes)
        db.session.add(abastecimento)
        return abastecimento


FONTES = {fonte.prefixo: fonte for fonte in (FonteMultas(), FonteDanos(), FonteAbastecimentos())}


def identificar(custo_id) -> tuple[FonteCustoVirtual | None, int]:
    """
    Separa um id de custo em (fonte, id). Ids numéricos são custos reais
    (fonte None); ids com prefixo pertencem a uma fonte virtual.
    """
    if isinstance(custo_id, int):
        return None, custo_id
    texto = str(custo_id)
    if texto.isdigit():
        return None, int(texto)
    prefixo, _, resto = texto.partition('_')
    fonte = FONTES.get(prefixo)
    if not fonte or not resto.isdigit():
        raise ValueError(f'Identificador de custo inválido: {custo_id}')
    return fonte, int(resto)


def listar_custos_virtuais(veiculo_id=None) -> list[dict]:
    resultado = []
    for fonte in FONTES.values():
        resultado.extend(fonte.projetar(r) for r in fonte.listar(veiculo_id=veiculo_id))
    return resultado


def listar_livro_custos(categoria=None, origem=None, status=None, veiculo_id=None,
                        somente_a_definir=False) -> list[dict]:
    """
    Visão unificada: custos reais + custos virtuais, mais recentes primeiro
    """
    itens = [c.to_dict() for c in CustoService.listar_custos(veiculo_id=veiculo_id)]
    itens.extend(listar_custos_virtuais(veiculo_id=veiculo_id))

    if categoria:
        itens = [i for i in itens if i['categoria'] == categoria]
    if origem:
        itens = [i for i in itens if i['origem'] == origem]
    if status:
        itens = [i for i in itens if i['status'] == status]
    if somente_a_definir:
        itens = [i for i in itens if i['valor_a_definir']]

    itens.sort(key=lambda i: i.get('criado_em') or '', reverse=True)
    return itens


def atualizar_estimativa(custo_id, valor, observacoes=None):
    """
    Resolve um custo "valor a definir" gravando o valor na tabela dona:
    multa, dano ou abastecimento para ids virtuais; custo para ids reais.

    Returns:
        dict: Custo (real ou virtual) já projetado com o novo valor
    """
    valor_dec = to_decimal(valor)
    if valor_dec is None or valor_dec < 0:
        raise ValueError('Valor inválido')

    fonte, registro_id = identificar(custo_id)
    if fonte is None:
        alteracoes = {'valor': valor_dec}
        if observacoes is not None:
            alteracoes['observacoes'] = observacoes
        custo = CustoService.atualizar_custo(registro_id, alteracoes)
        db.session.flush()
        logger.info('Estimativa atualizada: custo %s = %s', registro_id, valor_dec)
        return custo.to_dict()

    registro = fonte.atualizar_estimativa(registro_id, valor_dec, observacoes)
    db.session.flush()
    logger.info('Estimativa atualizada: %s %s = %s', fonte.tipo, registro_id, valor_dec)
    return fonte.projetar(registro)
