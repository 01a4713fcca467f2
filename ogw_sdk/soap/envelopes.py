"""
Built-in request templates for the OGW services.

Every template uses ``{{NAME}}`` placeholders and is rendered through
``render_template``; caller overrides for the same step replace these verbatim.
"""

VFDE_ENVELOPE_OPEN = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" xmlns:vfde="http://vfde.amdocs.com/">
  <soapenv:Header/>
  <soapenv:Body>"""

VFDE_ENVELOPE_CLOSE = """
  </soapenv:Body>
</soapenv:Envelope>"""


def _vfde(body: str) -> str:
    return VFDE_ENVELOPE_OPEN + body + VFDE_ENVELOPE_CLOSE


SUBMIT_ORDER = _vfde("""
    <vfde:SubmitOrder>
      <OrderID>{{ORDER_ID}}</OrderID>
      <Mode>{{MODE}}</Mode>
      <OGWOrderID>{{OGW_ORDER_ID}}</OGWOrderID>
    </vfde:SubmitOrder>""")

SET_ORDER_STATUS = _vfde("""
    <vfde:SetOrderStatus>
      <OGWSubOrderId>{{OGW_ORDER_ID}}</OGWSubOrderId>
    </vfde:SetOrderStatus>""")

SET_ORDER_STATUS_FOR_LINE = _vfde("""
    <vfde:SetOrderStatus>
      <OGWSubOrderId>{{OGW_ORDER_ID}}</OGWSubOrderId>
      <OGWSubscriberId>{{ORDER_LINE_ID}}</OGWSubscriberId>
    </vfde:SetOrderStatus>""")

HW_FULFILMENT_READY = _vfde("""
    <vfde:SetOrderStatus>
      <OGWSubOrderId>{{OGW_ORDER_ID}}</OGWSubOrderId>
      <OGWOrderLineId>{{ORDER_LINE_ID}}</OGWOrderLineId>
    </vfde:SetOrderStatus>""")

OM_SEND_DOCUMENT_CALLBACK = _vfde("""
    <vfde:sendDocumentResponse>
      <auftragId>{{AUFTRAG_ID}}</auftragId>
      <externeId>{{OGW_ORDER_ID}}|{{ORDER_LINE_ID}}|P</externeId>
    </vfde:sendDocumentResponse>""")

GET_ORDER = _vfde("""
    <vfde:GetOrder>
      <OGWOrderId>{{OGW_ORDER_ID}}</OGWOrderId>
    </vfde:GetOrder>""")

CUSTOMER_SEARCH = _vfde("""
    <vfde:CustomerSearch>
      <CustomerID>{{CUSTOMER_ID}}</CustomerID>
    </vfde:CustomerSearch>""")

LEGACY_SEARCH = _vfde("""
    <vfde:LegacySearch>
      <CustomerID>{{CUSTOMER_ID}}</CustomerID>
    </vfde:LegacySearch>""")

SET_FN_ORDER_STATUS = """<?xml version="1.0" encoding="UTF-8"?>
<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" xmlns:ogw="http://ogw.amdocs.com/">
  <soapenv:Header/>
  <soapenv:Body>
    <ogw:SetFNOrderStatus>
      <ogw:orderId>{{BAR_CODE}}</ogw:orderId>
      <ogw:barcode>{{BAR_CODE}}</ogw:barcode>
      <ogw:status>{{STATUS}}</ogw:status>
    </ogw:SetFNOrderStatus>
  </soapenv:Body>
</soapenv:Envelope>"""

FRIDA_EVIDENCE = """[
  {
    "orderNumber": "{{OGW_ORDER_ID}}.{{ORDER_LINE_ID}}",
    "naiveScore": 2,
    "fraudLevel": "Kein Betrug",
    "fraudAction": "Freigeben",
    "checkDate": "{{TIMESTAMP}}"
  }
]"""
