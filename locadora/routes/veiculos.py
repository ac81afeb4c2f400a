"""
Rotas de histórico e danos de veículos
"""
from flask import Blueprint, jsonify, request

from locadora.models import db
from locadora.routes.comum import erro_interno, erro_regra, ler_bool, ler_payload_request
from locadora.services import inspecao_service, veiculo_historico_service

veiculos_bp = Blueprint('veiculos', __name__)


@veiculos_bp.route('/<int:veiculo_id>/historico', methods=['GET'])
def historico(veiculo_id):
    """
    Query params:
        tipo_evento: cost|fine|damage|fuel|contract
        data_inicio, data_fim: YYYY-MM-DD
        valor_minimo, valor_maximo
    """
    try:
        eventos = veiculo_historico_service.historico_veiculo(
            veiculo_id,
            tipo_evento=request.args.get('tipo_evento'),
            data_inicio=request.args.get('data_inicio'),
            data_fim=request.args.get('data_fim'),
            valor_minimo=request.args.get('valor_minimo'),
            valor_maximo=request.args.get('valor_maximo')
        )
        return jsonify({'success': True, 'data': eventos, 'total': len(eventos)}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@veiculos_bp.route('/<int:veiculo_id>/historico/estatisticas', methods=['GET'])
def estatisticas(veiculo_id):
    try:
        return jsonify({'success': True, 'data': veiculo_historico_service.estatisticas_por_tipo(veiculo_id)}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@veiculos_bp.route('/<int:veiculo_id>/historico/linha-do-tempo', methods=['GET'])
def linha_do_tempo(veiculo_id):
    try:
        return jsonify({'success': True, 'data': veiculo_historico_service.linha_do_tempo_mensal(veiculo_id)}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@veiculos_bp.route('/<int:veiculo_id>/danos', methods=['GET'])
def listar_danos(veiculo_id):
    try:
        danos = inspecao_service.listar_danos(veiculo_id, reparado=ler_bool('reparado'))
        return jsonify({'success': True, 'data': [d.to_dict() for d in danos], 'total': len(danos)}), 200
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)


@veiculos_bp.route('/<int:veiculo_id>/danos', methods=['POST'])
def registrar_dano(veiculo_id):
    """
    Body (JSON):
        {"local": str, "descricao": str,
         "tipo_dano": "Arranhão"|"Amassado"|"Quebrado"|"Desgaste"|"Outro",
         "severidade": "Baixa"|"Média"|"Alta", "custo_estimado": float,
         "requer_reparo": bool, "contrato_id": int}
    """
    try:
        dano, notificacao = inspecao_service.registrar_dano(veiculo_id, ler_payload_request())
        db.session.commit()
        return jsonify({
            'success': True,
            'data': dano.to_dict(),
            'notificacao': notificacao.to_dict()
        }), 201
    except ValueError as e:
        return erro_regra(e)
    except Exception as e:
        return erro_interno(e)
