from html import escape

PHASE_COLORS = {
    'Approved': '#10b981',
    'Completed': '#3b82f6',
    'Certificate Uploaded': '#8b5cf6',
    'Certificate Approved': '#10b981',
    'Rejected': '#ef4444',
    'Returned': '#f59e0b',
}


def get_status_email_template(full_name: str, request_id: int, phase: str, message: str) -> str:
    """
    Creates a responsive HTML email for OD request status changes.
    Compatible with Gmail, Outlook, Yahoo, and other major email clients.
    """
    color = PHASE_COLORS.get(phase, '#667eea')
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta http-equiv="X-UA-Compatible" content="IE=edge">
    <title>OD Request Update</title>
</head>
<body style="margin: 0; padding: 0; font-family: Arial, Helvetica, sans-serif; background-color: #f4f6fa;">
    <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="100%" style="background-color: #f4f6fa;">
        <tr>
            <td align="center" style="padding: 20px 0;">
                <table role="presentation" cellspacing="0" cellpadding="0" border="0" width="600" style="max-width: 600px; width: 100%; background-color: #ffffff; border-radius: 12px; box-shadow: 0 4px 20px rgba(0,0,0,0.1); overflow: hidden;">
                    <tr>
                        <td style="padding: 30px 40px;">
                            <h1 style="margin: 0 0 20px 0; font-size: 22px; font-weight: 600; color: #2c3e50; text-align: center;">
                                Hello, {escape(full_name)}!
                            </h1>
                            <p style="margin: 0 0 20px 0; font-size: 16px; color: #555555; text-align: center;">
                                Your OD request <strong>#{request_id}</strong> has a new status:
                            </p>
                            <div style="text-align: center; padding-bottom: 25px;">
                                <span style="display: inline-block; background-color: {color}; color: #ffffff; padding: 12px 24px; border-radius: 8px; font-size: 18px; font-weight: bold;">
                                    {escape(phase)}
                                </span>
                            </div>
                            <div style="background-color: #f8f9fa; border-left: 4px solid {color}; padding: 15px; border-radius: 5px;">
                                <p style="margin: 0; font-size: 14px; color: #495057; line-height: 1.4;">
                                    {escape(message)}
                                </p>
                            </div>
                        </td>
                    </tr>
                    <tr>
                        <td style="padding: 20px 40px 30px 40px; background-color: #f8f9fa; border-top: 1px solid #e9ecef; text-align: center;">
                            <p style="margin: 0; font-size: 12px; color: #6c757d;">
                                This is an automated message from the OD Portal, please do not reply.
                            </p>
                        </td>
                    </tr>
                </table>
            </td>
        </tr>
    </table>
</body>
</html>
"""
