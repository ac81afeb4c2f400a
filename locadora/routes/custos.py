"""
Rotas da API do Livro de Custos

Endpoints organizados em 3 grupos:
1. Livro unificado (custos reais + multas, danos e abastecimentos)
2. CRUD e transições de custos reais
3. Custos recorrentes e estatísticas
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import custo_virtual_service
from locadora.services.custo_service import CustoService
from locadora.services.datas import parse_date

custos_bp = Blueprint('custos', __name__)


# ============================================================================
# 1. LIVRO UNIFICADO
# ============================================================================

@custos_bp.route('', methods=['GET'])
def listar_custos():
    """
    Query params:
        categoria, origem, status, veiculo_id
        a_definir: true - somente custos com valor a definir

    Returns:
        JSON com custos e totais (custos "a definir" fora das somas)
    """
    try:
        itens = custo_virtual_service.listar_livro_custos(
            categoria=request.args.get('categoria'),
            origem=request.args.get('origem'),
            status=request.args.get('status'),
            veiculo_id=request.args.get('veiculo_id', type=int),
            somente_a_definir=bool(ler_bool('a_definir'))
        )
        return jsonify({
            'success': True,
            'data': itens,
            'totais': CustoService.totais(itens),
            'total': len(itens)
        }), 200
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/<custo_id>/estimativa', methods=['PUT'])
def atualizar_estimativa(custo_id):
    """
    Define o valor de um custo "a definir"

    custo_id pode ser numérico (custo real) ou 'fine_N', 'damage_N', 'fuel_N'.

    Body (JSON):
        {"valor": float, "observacoes": "string" (opcional)}
    """
    try:
        dados = ler_payload_request()
        if 'valor' not in dados:
            return jsonify({'success': False, 'error': 'valor é obrigatório'}), 400
        item = custo_virtual_service.atualizar_estimativa(custo_id, dados['valor'], dados.get('observacoes'))
        db.session.commit()
        return jsonify({'success': True, 'message': 'Estimativa atualizada', 'data': item}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


# ============================================================================
# 2. CUSTOS REAIS
# ============================================================================

@custos_bp.route('/<int:custo_id>', methods=['GET'])
def buscar_custo(custo_id):
    try:
        return jsonify({'success': True, 'data': CustoService.obter_custo(custo_id).to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('', methods=['POST'])
def criar_custo():
    """
    Body (JSON):
        {
            "descricao": "string",
            "categoria": "string",
            "valor": float (0 = valor a definir),
            "data_custo": "YYYY-MM-DD",
            "recorrente": bool (opcional),
            "tipo_recorrencia": "monthly|weekly|yearly" (se recorrente)
        }
    """
    try:
        dados = ler_payload_request()
        if dados.get('recorrente'):
            custo = CustoService.criar_custo_recorrente(dados)
        else:
            custo = CustoService.criar_custo(dados)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Custo criado', 'data': custo.to_dict()}), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/<int:custo_id>', methods=['PUT'])
def atualizar_custo(custo_id):
    try:
        custo = CustoService.atualizar_custo(custo_id, ler_payload_request())
        db.session.commit()
        return jsonify({'success': True, 'data': custo.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/<int:custo_id>', methods=['DELETE'])
def excluir_custo(custo_id):
    try:
        CustoService.excluir_custo(custo_id)
        db.session.commit()
        return jsonify({'success': True, 'message': 'Custo excluído'}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/<int:custo_id>/autorizar', methods=['POST'])
def autorizar_custo(custo_id):
    try:
        custo = CustoService.autorizar_custo(custo_id)
        db.session.commit()
        return jsonify({'success': True, 'data': custo.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/<int:custo_id>/pagar', methods=['POST'])
def pagar_custo(custo_id):
    try:
        custo = CustoService.marcar_custo_pago(custo_id)
        db.session.commit()
        return jsonify({'success': True, 'data': custo.to_dict()}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


# ============================================================================
# 3. RECORRENTES E ESTATÍSTICAS
# ============================================================================

@custos_bp.route('/recorrentes', methods=['GET'])
def listar_recorrentes():
    """
    Query params:
        categoria, veiculo_id
        situacao: 'vencidos' | 'proximos' (opcional)
        hoje: YYYY-MM-DD (opcional)
    """
    try:
        situacao = request.args.get('situacao')
        hoje = parse_date(request.args.get('hoje'))
        if situacao == 'vencidos':
            custos = CustoService.custos_recorrentes_vencidos(hoje)
        elif situacao == 'proximos':
            custos = CustoService.custos_recorrentes_proximos(hoje)
        else:
            custos = CustoService.listar_custos_recorrentes(
                categoria=request.args.get('categoria'),
                veiculo_id=request.args.get('veiculo_id', type=int)
            )
        return jsonify({
            'success': True,
            'data': [c.to_dict() for c in custos],
            'estatisticas': CustoService.estatisticas_recorrentes(hoje),
            'total': len(custos)
        }), 200
    except Exception as e:
        return erro_interno(e)


@custos_bp.route('/estatisticas/origem', methods=['GET'])
def estatisticas_origem():
    try:
        return jsonify({'success': True, 'data': CustoService.estatisticas_por_origem()}), 200
    except Exception as e:
        return erro_interno(e)
