"""
Serviço de Custos - Lógica de negócio do livro de custos

Este serviço implementa:
1. CRUD de custos avulsos (usuário, pátio, manutenção, compras)
2. Custos recorrentes (cálculo do próximo vencimento, consultas)
3. Transições de status (autorizar, pagar)
4. Totais e estatísticas por origem (ignorando "valor a definir")

Os métodos apenas adicionam/flush na sessão; o commit é feito pela rota.
"""
import logging
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, or_

from locadora.categorias import (
    CATEGORIAS_CUSTO,
    ORIGENS,
    ORIGEM_SISTEMA,
    ORIGEM_USUARIO,
    STATUS_AUTORIZADO,
    STATUS_PAGO,
    STATUS_PENDENTE,
    STATUS_VALIDOS,
    TIPOS_RECORRENCIA,
    normalizar_tipo_referencia,
)
from locadora.models import db, Custo
from locadora.services.datas import parse_date, proximo_vencimento, to_decimal

logger = logging.getLogger(__name__)

CAMPOS_ATUALIZAVEIS = (
    'categoria', 'descricao', 'valor', 'data_custo', 'status', 'origem',
    'documento_ref', 'observacoes', 'departamento', 'veiculo_id',
    'cliente_id', 'cliente_nome', 'contrato_id', 'tipo_recorrencia',
    'dia_recorrencia', 'proximo_vencimento',
)


def _id_opcional(valor):
    # Formulários enviam '' para "sem vínculo"
    if valor == '' or valor is None:
        return None
    return int(valor)


class CustoService:
    """
    Serviço para gerenciamento do livro de custos
    """

    # ========================================================================
    # CRUD DE CUSTOS AVULSOS
    # ========================================================================

    @staticmethod
    def criar_custo(dados, usuario=None):
        """
        Cria um custo avulso (nunca recorrente)

        Args:
            dados (dict): Dados do custo
                - descricao (str)
                - valor (float, opcional; 0 = valor a definir)
                - data_custo (str YYYY-MM-DD, opcional; padrão hoje)
                - categoria (str, opcional; padrão 'Combustível')
                - status / origem (opcionais)
            usuario (Funcionario, opcional): Quem está lançando

        Returns:
            Custo: Objeto criado

        Raises:
            ValueError: Se dados inválidos
        """
        if not dados.get('descricao'):
            raise ValueError('Descrição é obrigatória')

        categoria = dados.get('categoria') or 'Combustível'
        if categoria not in CATEGORIAS_CUSTO:
            raise ValueError(f'Categoria inválida. Use uma das seguintes: {", ".join(CATEGORIAS_CUSTO)}')

        status = dados.get('status') or STATUS_PENDENTE
        if status not in STATUS_VALIDOS:
            raise ValueError('Status inválido')

        valor = to_decimal(dados.get('valor'))
        if valor is None:
            valor = Decimal('0')
        if valor < 0:
            raise ValueError('Valor não pode ser negativo')

        data_custo = parse_date(dados.get('data_custo')) or date.today()

        custo = Custo(
            categoria=categoria,
            descricao=dados['descricao'],
            valor=valor,
            data_custo=data_custo,
            status=status,
            origem=dados.get('origem') or ORIGEM_SISTEMA,
            documento_ref=dados.get('documento_ref'),
            observacoes=dados.get('observacoes'),
            departamento=dados.get('departamento'),
            criado_por_funcionario_id=dados.get('criado_por_funcionario_id') or (usuario.id if usuario else None),
            criado_por_nome=dados.get('criado_por_nome') or (usuario.nome if usuario else 'Usuário do Sistema'),
            referencia_origem_id=_id_opcional(dados.get('referencia_origem_id')),
            referencia_origem_tipo=normalizar_tipo_referencia(dados.get('referencia_origem_tipo')),
            veiculo_id=_id_opcional(dados.get('veiculo_id')),
            cliente_id=_id_opcional(dados.get('cliente_id')),
            cliente_nome=dados.get('cliente_nome'),
            contrato_id=_id_opcional(dados.get('contrato_id')),
            recorrente=False
        )

        db.session.add(custo)
        db.session.flush()
        return custo

    @staticmethod
    def obter_custo(custo_id):
        custo = db.session.get(Custo, custo_id)
        if not custo:
            raise ValueError('Custo não encontrado')
        return custo

    @staticmethod
    def atualizar_custo(custo_id, dados):
        """
        Atualiza campos permitidos de um custo

        Args:
            custo_id (int): ID do custo
            dados (dict): Campos a atualizar

        Returns:
            Custo: Custo atualizado
        """
        custo = CustoService.obter_custo(custo_id)

        if 'categoria' in dados and dados['categoria'] not in CATEGORIAS_CUSTO:
            raise ValueError('Categoria inválida')
        if 'status' in dados and dados['status'] not in STATUS_VALIDOS:
            raise ValueError('Status inválido')
        if 'tipo_recorrencia' in dados and dados['tipo_recorrencia'] not in (None, *TIPOS_RECORRENCIA):
            raise ValueError('Tipo de recorrência inválido')

        for campo in CAMPOS_ATUALIZAVEIS:
            if campo not in dados:
                continue
            valor = dados[campo]
            if campo == 'valor':
                valor = to_decimal(valor)
                if valor is None or valor < 0:
                    raise ValueError('Valor inválido')
            elif campo in ('data_custo', 'proximo_vencimento'):
                valor = parse_date(valor)
            elif campo in ('veiculo_id', 'cliente_id', 'contrato_id'):
                valor = _id_opcional(valor)
            setattr(custo, campo, valor)

        # Custo recorrente com nova data: recalcular próximo vencimento
        if custo.recorrente and 'data_custo' in dados and 'proximo_vencimento' not in dados:
            custo.proximo_vencimento = proximo_vencimento(custo.data_custo, custo.tipo_recorrencia)

        db.session.add(custo)
        return custo

    @staticmethod
    def excluir_custo(custo_id):
        custo = CustoService.obter_custo(custo_id)
        db.session.delete(custo)

    @staticmethod
    def marcar_custo_pago(custo_id):
        custo = CustoService.obter_custo(custo_id)
        custo.status = STATUS_PAGO
        db.session.add(custo)
        return custo

    @staticmethod
    def autorizar_custo(custo_id):
        """Autoriza uma compra/custo pendente"""
        custo = CustoService.obter_custo(custo_id)
        if custo.status == STATUS_PAGO:
            raise ValueError('Custo já está pago')
        custo.status = STATUS_AUTORIZADO
        db.session.add(custo)
        return custo

    # ========================================================================
    # CUSTOS RECORRENTES
    # ========================================================================

    @staticmethod
    def criar_custo_recorrente(dados):
        """
        Cria um custo recorrente calculando o próximo vencimento

        Args:
            dados (dict): Mesmos campos do custo avulso, mais
                - tipo_recorrencia ('monthly', 'weekly', 'yearly'; padrão 'monthly')
                - dia_recorrencia (int, opcional; padrão dia de data_custo)

        Returns:
            Custo: Custo recorrente criado
        """
        if not dados.get('descricao'):
            raise ValueError('Descrição é obrigatória')

        categoria = dados.get('categoria')
        if categoria not in CATEGORIAS_CUSTO:
            raise ValueError(f'Categoria inválida para custo recorrente: {categoria}')

        data_custo = parse_date(dados.get('data_custo'))
        if not data_custo:
            raise ValueError('data_custo inválida (use YYYY-MM-DD)')

        tipo = dados.get('tipo_recorrencia') or 'monthly'
        if tipo not in TIPOS_RECORRENCIA:
            raise ValueError('Tipo de recorrência inválido')

        valor = to_decimal(dados.get('valor'))
        if valor is None or valor < 0:
            raise ValueError('Valor inválido')

        custo = Custo(
            categoria=categoria,
            descricao=dados['descricao'],
            valor=valor,
            data_custo=data_custo,
            status=dados.get('status') or STATUS_PENDENTE,
            origem=dados.get('origem') or ORIGEM_USUARIO,
            documento_ref=dados.get('documento_ref'),
            observacoes=dados.get('observacoes'),
            departamento=dados.get('departamento'),
            criado_por_funcionario_id=dados.get('criado_por_funcionario_id'),
            criado_por_nome=dados.get('criado_por_nome'),
            referencia_origem_id=_id_opcional(dados.get('referencia_origem_id')),
            referencia_origem_tipo=normalizar_tipo_referencia(dados.get('referencia_origem_tipo')),
            veiculo_id=_id_opcional(dados.get('veiculo_id')),
            cliente_id=_id_opcional(dados.get('cliente_id')),
            cliente_nome=dados.get('cliente_nome'),
            contrato_id=_id_opcional(dados.get('contrato_id')),
            recorrente=True,
            tipo_recorrencia=tipo,
            dia_recorrencia=dados.get('dia_recorrencia') or data_custo.day,
            proximo_vencimento=proximo_vencimento(data_custo, tipo),
            custo_recorrente_pai_id=_id_opcional(dados.get('custo_recorrente_pai_id')),
            gerado_automaticamente=bool(dados.get('gerado_automaticamente', False))
        )

        db.session.add(custo)
        db.session.flush()
        return custo

    @staticmethod
    def listar_custos_recorrentes(categoria=None, veiculo_id=None):
        query = Custo.query.filter(Custo.recorrente.is_(True))
        if categoria:
            query = query.filter(Custo.categoria == categoria)
        if veiculo_id:
            query = query.filter(Custo.veiculo_id == veiculo_id)
        return query.order_by(Custo.proximo_vencimento.asc()).all()

    @staticmethod
    def custos_recorrentes_vencidos(hoje=None):
        hoje = hoje or date.today()
        return [c for c in CustoService.listar_custos_recorrentes()
                if c.proximo_vencimento and c.proximo_vencimento < hoje]

    @staticmethod
    def custos_recorrentes_proximos(hoje=None, dias=7):
        hoje = hoje or date.today()
        limite = hoje + timedelta(days=dias)
        return [c for c in CustoService.listar_custos_recorrentes()
                if c.proximo_vencimento and hoje <= c.proximo_vencimento <= limite]

    @staticmethod
    def estatisticas_recorrentes(hoje=None):
        custos = CustoService.listar_custos_recorrentes()
        return {
            'total': len(custos),
            'ativos': len([c for c in custos if c.status in (STATUS_PENDENTE, STATUS_AUTORIZADO)]),
            'vencidos': len(CustoService.custos_recorrentes_vencidos(hoje)),
            'proximos': len(CustoService.custos_recorrentes_proximos(hoje)),
            'valor_total': float(sum((c.valor or Decimal('0')) for c in custos))
        }

    # ========================================================================
    # CONSULTAS E TOTAIS
    # ========================================================================

    @staticmethod
    def listar_custos(categoria=None, origem=None, status=None, veiculo_id=None, incluir_recorrentes=False):
        """
        Lista custos reais (linhas da tabela custo)

        Por padrão exclui os recorrentes, que têm tela própria.
        """
        query = Custo.query
        if not incluir_recorrentes:
            query = query.filter(or_(Custo.recorrente.is_(None), Custo.recorrente.is_(False)))
        if categoria:
            query = query.filter(Custo.categoria == categoria)
        if origem:
            query = query.filter(Custo.origem == origem)
        if status:
            query = query.filter(Custo.status == status)
        if veiculo_id:
            query = query.filter(Custo.veiculo_id == veiculo_id)
        return query.order_by(Custo.criado_em.desc(), Custo.id.desc()).all()

    @staticmethod
    def totais(custos):
        """
        Soma valores por status ignorando custos "valor a definir"

        Aceita objetos Custo ou dicts já projetados (custos virtuais).

        Returns:
            dict: total_pago, total_pendente, total_autorizado, total_geral,
                  qtd_a_definir
        """
        totais = {
            STATUS_PAGO: Decimal('0'),
            STATUS_PENDENTE: Decimal('0'),
            STATUS_AUTORIZADO: Decimal('0'),
        }
        qtd_a_definir = 0

        for custo in custos:
            if isinstance(custo, dict):
                valor = Decimal(str(custo.get('valor') or 0))
                status = custo.get('status')
            else:
                valor = custo.valor or Decimal('0')
                status = custo.status

            if valor == 0 and status == STATUS_PENDENTE:
                qtd_a_definir += 1
                continue
            if status in totais:
                totais[status] += valor

        return {
            'total_pago': float(totais[STATUS_PAGO]),
            'total_pendente': float(totais[STATUS_PENDENTE]),
            'total_autorizado': float(totais[STATUS_AUTORIZADO]),
            'total_geral': float(sum(totais.values())),
            'qtd_a_definir': qtd_a_definir
        }

    @staticmethod
    def estatisticas_por_origem():
        """
        Quantidade e valor por origem (ignora "valor a definir")
        """
        linhas = db.session.query(
            Custo.origem,
            func.count(Custo.id),
            func.coalesce(func.sum(Custo.valor), 0)
        ).filter(
            ~((Custo.valor == 0) & (Custo.status == STATUS_PENDENTE))
        ).group_by(Custo.origem).all()

        resultado = {origem: {'quantidade': 0, 'valor_total': 0.0} for origem in ORIGENS}
        for origem, quantidade, total in linhas:
            item = resultado.setdefault(origem or ORIGEM_SISTEMA, {'quantidade': 0, 'valor_total': 0.0})
            item['quantidade'] += int(quantidade)
            item['valor_total'] += float(total or 0)
        return resultado
