"""
Centralized user-facing messages.

Single source of truth for every string the pool page, the form validators and
the JSON API show to users, keyed by locale. Italian is the default locale.

Usage:
    from poolpal.utils.messages import message

    flash(message("advice_failed"), "error")
    raise ValidationError(message("length_positive"))
"""

from __future__ import annotations

from typing import Mapping

from flask import current_app, has_app_context

DEFAULT_LOCALE = "it"

MESSAGES: Mapping[str, Mapping[str, str]] = {
    "it": {
        "app_tagline": "Il tuo assistente intelligente per la chimica della piscina.",
        "section_geometry": "Dimensioni Piscina & Temperatura",
        "section_geometry_hint": "Inserisci le misure della tua piscina.",
        "section_derived": "Calcoli & Valori Ideali",
        "section_reading": "Analisi Acqua Attuale",
        "section_reading_hint": "Inserisci i valori del tuo ultimo test dell'acqua.",
        "section_advice": "Suggerimenti Dosaggio",
        "label_pool_length": "Lunghezza (m)",
        "label_pool_width": "Larghezza (m)",
        "label_pool_average_depth": "Prof. Media (m)",
        "label_water_temperature": "Temp. Acqua (°C) (Opzionale)",
        "label_current_chlorine": "Cloro Libero (mg/l)",
        "label_current_ph": "pH",
        "label_current_redox": "Redox (mV) (Opzionale)",
        "label_current_salt": "Sale Attuale (kg) (Opzionale, per elettrolisi)",
        "label_surface_area": "Area Superficie",
        "label_volume": "Volume",
        "label_required_salt": "Sale Totale Richiesto (per 4kg/m³)",
        "label_ideal_values": "Parametri Acqua Ideali:",
        "label_chlorine_advice": "Dosaggio Cloro:",
        "label_ph_minus_advice": "Dosaggio pH Minus:",
        "label_salt_to_add": "Sale da Aggiungere (per sistemi a sale):",
        "ideal_chlorine": "Cloro",
        "ideal_ph": "pH",
        "ideal_redox": "Redox",
        "ideal_salt": "Sale (per sistemi a sale)",
        "salt_to_add_sentence": "Devi aggiungere circa {amount} kg di sale per raggiungere l'obiettivo di 4 kg/m³.",
        "salt_assumed_zero": "Questo presuppone 0kg di sale attuale poiché non è stato fornito alcun valore.",
        "submit": "Calcola & Ottieni Suggerimenti Dosaggio",
        "not_available": "N/A",
        "important_notice": "Avviso Importante",
        "general_disclaimer": (
            "Tutti i suggerimenti di dosaggio sono approssimazioni. Calibra sempre i dosaggi in base ai "
            "prodotti specifici che utilizzi e ripeti il test dei parametri dell'acqua dopo l'applicazione. "
            "Consulta le istruzioni del prodotto per un dosaggio preciso."
        ),
        "fallback_disclaimer": (
            "Nota: tutti i dosaggi sono indicativi e vanno calibrati in base al prodotto specifico utilizzato."
        ),
        "footer": "Tuffati in un'acqua perfettamente bilanciata!",
        "error_title": "Errore",
        "advice_failed": "Impossibile ottenere suggerimenti sul dosaggio. Riprova.",
        "advice_busy": "Una richiesta di dosaggio è già in corso. Attendi il risultato.",
        "validation_failed": "Controlla i valori inseriti.",
        "rate_limited": "Troppe richieste. Riprova tra poco.",
        "csrf_failed": "La sessione è scaduta o il modulo non è aggiornato. Ricarica la pagina e riprova.",
        "not_found": "Pagina non trovata.",
        "server_error": "Si è verificato un errore imprevisto. Riprova.",
        "invalid_number": "Inserisci un numero valido.",
        "field_required": "Campo obbligatorio.",
        "length_positive": "La lunghezza deve essere positiva.",
        "width_positive": "La larghezza deve essere positiva.",
        "depth_positive": "La profondità media deve essere positiva.",
        "chlorine_negative": "Il cloro non può essere negativo.",
        "ph_negative": "Il pH non può essere negativo.",
        "ph_range": "Il pH deve essere compreso tra 0 e 14.",
        "salt_negative": "Il sale non può essere negativo.",
    },
    "en": {
        "app_tagline": "Your smart assistant for pool water chemistry.",
        "section_geometry": "Pool Dimensions & Temperature",
        "section_geometry_hint": "Enter your pool measurements.",
        "section_derived": "Calculations & Ideal Values",
        "section_reading": "Current Water Test",
        "section_reading_hint": "Enter the values from your latest water test.",
        "section_advice": "Dosage Suggestions",
        "label_pool_length": "Length (m)",
        "label_pool_width": "Width (m)",
        "label_pool_average_depth": "Avg. Depth (m)",
        "label_water_temperature": "Water Temp. (°C) (Optional)",
        "label_current_chlorine": "Free Chlorine (mg/l)",
        "label_current_ph": "pH",
        "label_current_redox": "Redox (mV) (Optional)",
        "label_current_salt": "Current Salt (kg) (Optional, for salt systems)",
        "label_surface_area": "Surface Area",
        "label_volume": "Volume",
        "label_required_salt": "Total Salt Required (at 4kg/m³)",
        "label_ideal_values": "Ideal Water Parameters:",
        "label_chlorine_advice": "Chlorine Dosage:",
        "label_ph_minus_advice": "pH Minus Dosage:",
        "label_salt_to_add": "Salt to Add (for salt systems):",
        "ideal_chlorine": "Chlorine",
        "ideal_ph": "pH",
        "ideal_redox": "Redox",
        "ideal_salt": "Salt (for salt systems)",
        "salt_to_add_sentence": "You need to add about {amount} kg of salt to reach the 4 kg/m³ target.",
        "salt_assumed_zero": "This assumes 0kg of current salt since no value was provided.",
        "submit": "Calculate & Get Dosage Suggestions",
        "not_available": "N/A",
        "important_notice": "Important Notice",
        "general_disclaimer": (
            "All dosage suggestions are approximations. Always calibrate dosages to the specific products "
            "you use and retest the water after applying them. Follow the product instructions for precise dosing."
        ),
        "fallback_disclaimer": (
            "Note: all dosages are approximate and must be calibrated to the specific product you use."
        ),
        "footer": "Dive into perfectly balanced water!",
        "error_title": "Error",
        "advice_failed": "Unable to get dosage suggestions. Please try again.",
        "advice_busy": "A dosage request is already in progress. Please wait for the result.",
        "validation_failed": "Please check the values you entered.",
        "rate_limited": "Too many requests. Please try again shortly.",
        "csrf_failed": "Your session expired or this form is out of date. Refresh and try again.",
        "not_found": "Page not found.",
        "server_error": "An unexpected error occurred. Please try again.",
        "invalid_number": "Enter a valid number.",
        "field_required": "This field is required.",
        "length_positive": "Length must be positive.",
        "width_positive": "Width must be positive.",
        "depth_positive": "Average depth must be positive.",
        "chlorine_negative": "Chlorine cannot be negative.",
        "ph_negative": "pH cannot be negative.",
        "ph_range": "pH must be between 0 and 14.",
        "salt_negative": "Salt cannot be negative.",
    },
}

SUPPORTED_LOCALES = tuple(MESSAGES)


def active_locale() -> str:
    if has_app_context():
        locale = current_app.config.get("POOLPAL_LOCALE") or DEFAULT_LOCALE
        if locale in MESSAGES:
            return locale
    return DEFAULT_LOCALE


def catalog(locale: str | None = None) -> Mapping[str, str]:
    return MESSAGES.get(locale or active_locale(), MESSAGES[DEFAULT_LOCALE])


def message(key: str, locale: str | None = None, **params: object) -> str:
    text = catalog(locale).get(key) or MESSAGES[DEFAULT_LOCALE][key]
    return text.format(**params) if params else text
